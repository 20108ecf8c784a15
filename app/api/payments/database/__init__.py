from .initializer import PaymentsInitializer

__all__ = ["PaymentsInitializer"]
