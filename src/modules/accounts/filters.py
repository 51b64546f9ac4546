import django_filters

from modules.accounts.models import User, UserRole


class UserFilter(django_filters.FilterSet):
    name = django_filters.CharFilter(field_name="name", lookup_expr="icontains")
    role = django_filters.ChoiceFilter(field_name="role", choices=UserRole.choices)
    active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = User
        fields = ["name", "role", "active"]
