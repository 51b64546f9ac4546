"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.  Domain
errors propagate to the centralized exception handler; the only error
rendered here is the create-time name conflict, whose body carries the
existing product.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.payloads import build_dto, request_payload
from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import ProductAlreadyExists
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService


class ProductViewSet(GenericViewSet):
    """ViewSet for Product CRUD operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Product.objects.none()
    serializer_class = ProductSerializer
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/products"""
        products = self._service.list_products()
        return Response(ProductSerializer(products, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        product = self._service.get_product(pk)
        return Response(ProductSerializer(product).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/products"""
        dto = build_dto(CreateProductDTO, request_payload(request))

        try:
            product = self._service.create_product(dto, actor=request.user)
        except ProductAlreadyExists as exc:
            return Response(
                {
                    "message": exc.message,
                    "product": ProductSerializer(exc.existing).data
                    if exc.existing is not None
                    else None,
                },
                status=status.HTTP_409_CONFLICT,
            )

        return Response(
            {"message": "Product created", "product": ProductSerializer(product).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/products/{pk}"""
        dto = build_dto(UpdateProductDTO, request_payload(request))
        product = self._service.update_product(pk, dto, actor=request.user)
        return Response(
            {"message": "Product updated", "product": ProductSerializer(product).data}
        )

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/products/{pk}"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        product = self._service.delete_product(pk, actor=request.user)
        return Response(
            {"message": "Product deleted", "product": ProductSerializer(product).data}
        )
