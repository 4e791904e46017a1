"""
Salon Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("booking/slots", views.available_slots_view),
    path("booking/validate", views.booking_validate_view),
    path("loyalty/quote", views.loyalty_quote_view),
    path("vouchers/validate", views.voucher_validate_view),
]
