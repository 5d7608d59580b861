from sqlalchemy.types import TypeDecorator, String


class EnumValueType(TypeDecorator):
    """
    Grava o valor do enum (não o nome) e aceita aliases legados via `_missing_`
    do próprio enum. Na leitura devolve sempre o membro do enum.
    """

    impl = String(20)
    cache_ok = True

    def __init__(self, enum_class, length: int = 20, *args, **kwargs):
        self.enum_class = enum_class
        super().__init__(length, *args, **kwargs)

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, self.enum_class):
            return value.value
        try:
            return self.enum_class(value.value if hasattr(value, "value") else value).value
        except ValueError:
            raise ValueError(f"Valor inválido para {self.enum_class.__name__}: {value}")

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        try:
            return self.enum_class(value)
        except ValueError:
            raise LookupError(f"Valor de {self.enum_class.__name__} desconhecido no banco: {value}")
