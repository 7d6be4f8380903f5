from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from modules.customers.models import Address, Customer
from modules.events.models import Event
from modules.orders.constants import OrderStatus, PaymentMethod
from modules.orders.models import Kit, Order
from modules.zones.models import CepZone

User = get_user_model()

CUSTOMER_CPFS = ("59860184275", "82382537098", "39053344705")
KIT_CPF = "52998224725"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    """Throttle counters live in the locmem cache and would leak across tests."""
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def auth_client():
    client = APIClient()
    user = User.objects.create_user(username="relatorios", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def event():
    return Event.objects.create(
        name="Corrida Run 2025",
        date=date(2025, 9, 14),
        location="Busto de Tamandaré",
        city="João Pessoa",
        state="PB",
        available=True,
    )


@pytest.fixture()
def make_customer():
    counter = {"n": 0}

    def _make(name="Maria Silva", cpf=None, **kwargs):
        cpf = cpf or CUSTOMER_CPFS[counter["n"] % len(CUSTOMER_CPFS)]
        counter["n"] += 1
        return Customer.objects.create(
            name=name,
            cpf=cpf,
            email=kwargs.pop("email", f"cliente{counter['n']}@example.com"),
            **kwargs,
        )

    return _make


@pytest.fixture()
def make_address():
    def _make(customer, zip_code="58000000", **kwargs):
        defaults = {
            "street": "Rua A",
            "number": "10",
            "neighborhood": "Centro",
            "city": "João Pessoa",
            "state": "PB",
        }
        defaults.update(kwargs)
        return Address.objects.create(customer=customer, zip_code=zip_code, **defaults)

    return _make


@pytest.fixture()
def make_order():
    def _make(event, customer, address, kits=(), **kwargs):
        order = Order.objects.create(
            event=event,
            customer=customer,
            address=address,
            status=kwargs.pop("status", OrderStatus.CONFIRMED),
            total_cost=kwargs.pop("total_cost", Decimal("50.00")),
            payment_method=kwargs.pop("payment_method", PaymentMethod.PIX),
            **kwargs,
        )
        for name, shirt_size in kits:
            Kit.objects.create(order=order, name=name, cpf=KIT_CPF, shirt_size=shirt_size)
        return order

    return _make


@pytest.fixture()
def make_zone():
    def _make(name, ranges, priority=1, active=True):
        return CepZone.objects.create(
            name=name,
            priority=priority,
            active=active,
            cep_ranges=[{"start": start, "end": end} for start, end in ranges],
        )

    return _make
