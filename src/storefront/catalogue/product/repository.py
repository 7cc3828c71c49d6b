from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    def all_products(self) -> list[Product]:
        return self._dao.query.limit(None).all().items

    def find_many(self, product_ids) -> dict[str, Product]:
        """Load several products at once, keyed by id. Unknown ids are omitted."""
        wanted = {str(pid) for pid in product_ids}
        if not wanted:
            return {}
        return {str(p.id): p for p in self.all_products() if str(p.id) in wanted}
