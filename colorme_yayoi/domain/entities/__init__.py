"""エンティティ"""
from colorme_yayoi.domain.entities.customer import Customer, NewCustomerCandidate
from colorme_yayoi.domain.entities.order import MatchMethod, Order, OrderItem

__all__ = ["Customer", "NewCustomerCandidate", "MatchMethod", "Order", "OrderItem"]
