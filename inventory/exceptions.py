from raktsetu.exceptions import RaktSetuError, NotFound  # noqa: F401


class InvalidQuantity(RaktSetuError):
    default_message = 'Units must be a positive number'


class InvalidBloodGroup(RaktSetuError):
    default_message = 'Invalid blood group'


class InsufficientStock(RaktSetuError):
    default_message = 'Insufficient stock'
