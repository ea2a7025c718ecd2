from .type_enum import FieldType
from .predicate import Predicate, PredicateKind

__all__ = [
    'FieldType',
    'Predicate',
    'PredicateKind',
]
