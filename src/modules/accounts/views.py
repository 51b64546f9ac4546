"""User account API views.

Backs the ``/api/users/{id}`` calls made by the admin front end
(``static/accounts/js/index.js``).  Errors propagate to the centralized
exception handler.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.accounts.dtos import CreateUserDTO, UpdateUserDTO
from modules.accounts.filters import UserFilter
from modules.accounts.models import User
from modules.accounts.permissions import CanManageUsers
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.serializers import UserSerializer
from modules.accounts.services import UserService
from modules.core.payloads import build_dto, request_payload


class UserViewSet(ListModelMixin, GenericViewSet):
    filterset_class = UserFilter
    search_fields = ["username", "name", "email"]
    ordering_fields = ["username", "name", "date_joined"]
    ordering = ["username"]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    permission_classes = [CanManageUsers]
    queryset = User.objects.all()
    serializer_class = UserSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._repo = UserDjangoRepository()
        self._service = UserService(repository=self._repo)

    def get_queryset(self):
        return self._repo.queryset()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/users/{pk}"""
        return Response(UserSerializer(self._service.get_user(pk)).data)

    def create(self, request: Request) -> Response:
        """POST /api/users"""
        dto = build_dto(CreateUserDTO, request_payload(request))
        user = self._service.create_user(dto, actor=request.user)
        return Response(
            {"message": "User created", "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/users/{pk}"""
        dto = build_dto(UpdateUserDTO, request_payload(request))
        user = self._service.update_user(pk, dto, actor=request.user)
        return Response({"message": "User updated", "user": UserSerializer(user).data})

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/users/{pk}"""
        user = self._service.delete_user(pk, actor=request.user)
        return Response({"message": "User deleted", "user": UserSerializer(user).data})
