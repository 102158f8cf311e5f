"""Save Product Use Case."""

from stocksync.application.dto.requests import SaveProductRequest
from stocksync.application.notifications import NotificationKind, saved_message
from stocksync.application.use_cases.base import StockUseCase
from stocksync.core.entities.product import Product


class SaveProductUseCase(StockUseCase):
    """Create or update a catalogue product."""

    async def execute(self, request: SaveProductRequest) -> Product:
        services = await self._get_services()

        product = Product(
            id=request.id.strip(),
            name=request.name.strip(),
            qty=request.qty,
        )
        product = await services.products.save(product, is_new=request.is_new)

        self._notify(
            NotificationKind.SUCCESS,
            saved_message(services.gateway.is_available(), "Product saved!"),
        )
        return product
