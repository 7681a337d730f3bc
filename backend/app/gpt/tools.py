# app/gpt/tools.py
# ------------------------------------------------------------------
# Definición de la única “tool” que el modelo puede invocar para
# consultar losprecios.co. El cliente de completions la envía tal cual.
# ------------------------------------------------------------------

SEARCH_PRICES_TOOL_NAME = "search_prices"

search_prices_tool = {
    "type": "function",
    "function": {
        "name": SEARCH_PRICES_TOOL_NAME,
        "description": "Busca precios de productos de supermercado en Colombia usando losprecios.co",
        "parameters": {
            "type": "object",
            "properties": {
                "term": {
                    "type": "string",
                    "description": "Nombre del producto a buscar, en español",
                },
                "city_id": {
                    "type": "integer",
                    "description": "ID del municipio (Bogotá=1, Medellín=2, Cali=3, Barranquilla=4)",
                },
            },
            "required": ["term"],
        },
    },
}
