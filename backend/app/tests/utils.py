from typing import Sequence

from app.models import AssistantMessage, Message, PriceSearchResult, ToolCall


class FakeChatClient:
    """Devuelve (o lanza) las respuestas en orden y guarda cada historial."""

    def __init__(self, *replies: AssistantMessage | Exception) -> None:
        self.replies = list(replies)
        self.histories: list[list[Message]] = []

    async def complete(self, history: Sequence[Message]) -> AssistantMessage:
        self.histories.append(list(history))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakePriceClient:
    def __init__(self, result: PriceSearchResult) -> None:
        self.result = result
        self.calls: list[tuple[str, int | None]] = []

    async def search(self, term: str, city_id: int | None = None) -> PriceSearchResult:
        self.calls.append((term, city_id))
        return self.result


def tool_call_reply(arguments: str, name: str = "search_prices") -> AssistantMessage:
    return AssistantMessage(
        content="",
        tool_calls=[ToolCall(id="call_1", name=name, arguments=arguments)],
    )


def ok_result() -> PriceSearchResult:
    return PriceSearchResult.model_validate(
        {
            "Resultado": "Ok",
            "Datos": {
                "Ítems": [
                    {
                        "Producto": "Arroz",
                        "Marca": "Diana",
                        "Tamaño": "500",
                        "Unidad": "g",
                        "ÍtemsTiendas": [
                            {"Tienda": "Éxito", "Precio": 12000, "Fecha": "2024-05-01"},
                            {"Tienda": "D1", "Precio": 8500.75, "Fecha": "2024-05-02"},
                        ],
                    }
                ]
            },
        }
    )
