from django.urls import path

from .views import BookingPaymentView, PaymentMethodsView, PaymentReceiptView, TestPaymentView

urlpatterns = [
    path("payments/methods/", PaymentMethodsView.as_view(), name="payment-methods"),
    path("payments/test/<str:booking_id>/", TestPaymentView.as_view(), name="payment-test"),
    path("payments/<str:booking_id>/", BookingPaymentView.as_view(), name="booking-payment"),
    path("payments/<str:booking_id>/receipt/", PaymentReceiptView.as_view(), name="payment-receipt"),
]
