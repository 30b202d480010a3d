from .controller import PaginatedFilterController

__all__ = ["PaginatedFilterController"]
