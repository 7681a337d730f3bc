# app/gpt/prompts.py

from app.gpt.tools import SEARCH_PRICES_TOOL_NAME
from app.models import City

_CITY_MAPPING = ", ".join(f"{city.label}={city.value}" for city in City)

SYSTEM_PROMPT = (
    "Eres un asistente experto en precios de productos de supermercados. "
    "Cuando un usuario pregunte por el precio, debes extraer el nombre del "
    "producto y, si se menciona un municipio (por ejemplo, "
    + ", ".join(f"'{city.label}'" for city in City)
    + f"), convertir ese municipio en su ID correspondiente ({_CITY_MAPPING}) "
    f"y ejecutar la función '{SEARCH_PRICES_TOOL_NAME}' con esos parámetros."
)

GREETING = (
    "Hola, soy un asistente para consultar precios de productos en Colombia. "
    "¿Qué producto te gustaría consultar?"
)

THINKING_TEXT = "Pensando..."
SEARCHING_TEXT = "Buscando precios..."

TOOL_RESULT_SUFFIX = (
    ". Por favor, usa la información anterior y dime los precios del producto, "
    "si no, dame información general del producto que encuentres."
)

ERROR_TEXT = "Lo siento, ocurrió un error al procesar tu solicitud."
INVALID_TOOL_CALL_TEXT = (
    "Lo siento, no pude interpretar la búsqueda de precios. "
    "¿Puedes indicarme el producto y, si quieres, la ciudad?"
)
