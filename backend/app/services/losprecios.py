# app/services/losprecios.py

import logging

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.models import PriceSearchResult

SEARCH_ERROR_MESSAGE = "Error al buscar precios"


class PriceLookupClient:
    """Cliente de ``GET /buscar/resultado`` en losprecios.co.

    Nunca lanza: cualquier fallo de red o de parseo se devuelve como un
    ``PriceSearchResult`` con ``Resultado="Error"``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = settings.LOSPRECIOS_API_KEY if api_key is None else api_key
        self.url = url or settings.PRICE_API_URL
        self._transport = transport

    def build_params(self, term: str, city_id: int | None = None) -> dict[str, str]:
        params = {
            "ClaveAPI": self.api_key,
            "Término": term,
            "Tipo": "Ítem",
        }
        if city_id:
            params["MunicipioID"] = str(city_id)
        return params

    async def search(self, term: str, city_id: int | None = None) -> PriceSearchResult:
        params = self.build_params(term, city_id)
        logging.info("→ losprecios search term=%r city_id=%s", term, city_id)

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                r = await client.get(self.url, params=params)
                r.raise_for_status()
                return PriceSearchResult.model_validate(r.json())
        except (httpx.HTTPError, ValueError, ValidationError):
            logging.exception("Error searching prices for %r", term)
            return PriceSearchResult(status="Error", message=SEARCH_ERROR_MESSAGE)
