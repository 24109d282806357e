from .errors import ReferentialViolation, SourceReadError, StoreError
from .protocols import ConditionTotal, EntityRepository, ReportStore, Store, TopCustomer, TopProduct
from .sqlalchemy_store import SQLAlchemyRepository, SQLAlchemyStore

__all__ = [
    'ReferentialViolation', 'SourceReadError', 'StoreError',
    'ConditionTotal', 'EntityRepository', 'ReportStore', 'Store', 'TopCustomer', 'TopProduct',
    'SQLAlchemyRepository', 'SQLAlchemyStore',
]
