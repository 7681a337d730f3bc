# app/models.py
"""Modelos de dominio: mensajes de la conversación y resultados de losprecios.co."""

from __future__ import annotations

from enum import IntEnum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StringConstraints,
    model_validator,
)


# ───────────────────────────── ciudades ──────────────────────────────
class City(IntEnum):
    """Municipios soportados por el servicio de precios (``MunicipioID``)."""

    BOGOTA = 1
    MEDELLIN = 2
    CALI = 3
    BARRANQUILLA = 4

    @property
    def label(self) -> str:
        return _CITY_LABELS[self]


_CITY_LABELS = {
    City.BOGOTA: "Bogotá",
    City.MEDELLIN: "Medellín",
    City.CALI: "Cali",
    City.BARRANQUILLA: "Barranquilla",
}


# ───────────────────────────── mensajes ──────────────────────────────
class ToolCall(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    arguments: str = "{}"

    def to_api(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }
        if self.id is not None:
            data["id"] = self.id
        return data


class SystemMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["system"] = "system"
    content: str

    def to_api(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class UserMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user"] = "user"
    content: str

    def to_api(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


class AssistantMessage(BaseModel):
    """Respuesta del modelo.

    ``is_loading`` marca el placeholder transitorio ("Pensando...") y nunca
    se envía al servicio de completions.
    """

    model_config = ConfigDict(frozen=True)

    role: Literal["assistant"] = "assistant"
    content: str = ""
    tool_calls: list[ToolCall] | None = None
    is_loading: bool = False

    @property
    def first_tool_call(self) -> ToolCall | None:
        return self.tool_calls[0] if self.tool_calls else None

    def to_api(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = [call.to_api() for call in self.tool_calls]
        return data


class ToolMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["tool"] = "tool"
    content: str
    tool_call_id: str | None = None

    def to_api(self) -> dict[str, Any]:
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data


Message = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]


class SearchPricesArgs(BaseModel):
    """Argumentos de la tool ``search_prices`` tal como los envía el modelo."""

    term: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
    city_id: PositiveInt | None = Field(
        default=None,
        validation_alias=AliasChoices("city_id", "cityId", "municipio_id"),
    )


# ─────────────────────────── losprecios.co ───────────────────────────
class StoreOffer(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    store_name: str = Field(alias="Tienda")
    price: float = Field(alias="Precio", allow_inf_nan=False)
    date: str | None = Field(default=None, alias="Fecha")


class PricedItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    product_name: str = Field(alias="Producto")
    brand: str | None = Field(default=None, alias="Marca")
    size: str | None = Field(default=None, alias="Tamaño")
    unit: str | None = Field(default=None, alias="Unidad")
    store_offers: list[StoreOffer] | None = Field(default=None, alias="ÍtemsTiendas")


class PriceSearchResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(alias="Resultado")
    message: str | None = Field(default=None, alias="Mensaje")
    items: list[PricedItem] | None = None

    @model_validator(mode="before")
    @classmethod
    def _flatten_datos(cls, data: Any) -> Any:
        # {"Datos": {"Ítems": [...]}} -> items
        if isinstance(data, dict) and "Datos" in data:
            data = dict(data)
            datos = data.pop("Datos") or {}
            if not isinstance(datos, dict):
                raise ValueError(f"Datos must be an object, got {type(datos).__name__}")
            data["items"] = datos.get("Ítems")
        return data

    @property
    def is_success(self) -> bool:
        return self.status == "Ok"
