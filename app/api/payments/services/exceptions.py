class PaymentServiceException(Exception):
    """
    Violação de regra de negócio do ciclo de vida do pagamento.

    `not_found` indica que o pagamento não existe, para que a camada HTTP
    possa responder 404 em vez de 400.
    """

    def __init__(self, message: str, not_found: bool = False):
        super().__init__(message)
        self.message = message
        self.not_found = not_found

    def __str__(self) -> str:
        return self.message
