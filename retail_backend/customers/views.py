# customers/views.py

from django.db.models import Q
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from customers.models import Customer
from customers.serializers import CustomerSerializer
from permissions.roles import CAP_CUSTOMERS_MANAGE, HasCapability


class CustomerViewSet(viewsets.ModelViewSet):
    """
    Customer CRUD (admin dashboard).

    Query params (list):
    - q: name / email / phone search

    Deleting a customer that has sales is refused (409): sales keep their buyer.
    """

    serializer_class = CustomerSerializer
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_CUSTOMERS_MANAGE
    filterset_fields = ["client_type"]

    def get_queryset(self):
        qs = Customer.objects.select_related("client_type").order_by("name")

        q = (self.request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(Q(name__icontains=q) | Q(email__icontains=q) | Q(phone__icontains=q))

        return qs
