# app/services/price_format.py

from app.models import PricedItem, PriceSearchResult, StoreOffer

NO_RESULTS_TEXT = "❌ No se encontraron resultados para tu búsqueda."
NO_PRICES_TEXT = "⚠️ No hay precios disponibles para este ítem en el municipio seleccionado."


def format_cop(price: float) -> str:
    """12000.9 -> "$12.000" (separador de miles es-CO)."""
    return "$" + f"{int(price):,}".replace(",", ".")


def _format_offer(offer: StoreOffer) -> str:
    return f"   🛒 {offer.store_name} ➜ {format_cop(offer.price)} COP [{offer.date or ''}]\n"


def _format_item(item: PricedItem) -> str:
    lines = f"\n🔹 {item.product_name} - {item.brand or ''} ({item.size or ''} {item.unit or ''})\n"
    if not item.store_offers:
        return lines + f"   {NO_PRICES_TEXT}\n"
    return lines + "".join(_format_offer(offer) for offer in item.store_offers)


def format_results(result: PriceSearchResult) -> str:
    """Convierte la respuesta de losprecios.co en el texto de la tool."""
    if not result.is_success or not result.items:
        return NO_RESULTS_TEXT
    return "".join(_format_item(item) for item in result.items)
