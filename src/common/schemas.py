from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая схема API: поля в snake_case, JSON в camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Схема ответа с текстовым сообщением."""

    message: str


class CustomErrorResponse(BaseModel):
    """Схема для пользовательских ошибок."""

    code: int
    message: str

    model_config = ConfigDict(from_attributes=True)
