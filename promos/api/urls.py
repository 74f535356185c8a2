from django.urls import path

from accounts.views import VerifiedRetailersView
from .views import (
    PromoCodeListView,
    PromoCodeUploadView,
    PromoCodeGenerateView,
    RedeemPromoCodeView,
    CheckRedemptionsView,
    FlashPromoListView,
    FlashPromoDetailView,
    FlashPromoStatusView,
    FlashPromoJoinView,
    FlashPromoLeaveView,
)

urlpatterns = [
    path("promo-codes", PromoCodeListView.as_view(), name="promo-code-list"),
    path("promo-codes/upload", PromoCodeUploadView.as_view(), name="promo-code-upload"),
    path("promo-codes/generate", PromoCodeGenerateView.as_view(), name="promo-code-generate"),
    path("promo-codes/redeem", RedeemPromoCodeView.as_view(), name="promo-code-redeem"),
    path("promo-codes/retailers", VerifiedRetailersView.as_view(), name="verified-retailers"),
    path(
        "promo-codes/check-redemptions/<str:user_id>",
        CheckRedemptionsView.as_view(),
        name="promo-code-check-redemptions",
    ),
]

# Flash promo endpoints
urlpatterns += [
    path("flash-promos", FlashPromoListView.as_view(), name="flash-promo-list"),
    path("flash-promos/<int:pk>", FlashPromoDetailView.as_view(), name="flash-promo-detail"),
    path("flash-promos/<int:pk>/status", FlashPromoStatusView.as_view(), name="flash-promo-status"),
    path("flash-promos/<int:pk>/join", FlashPromoJoinView.as_view(), name="flash-promo-join"),
    path("flash-promos/<int:pk>/leave", FlashPromoLeaveView.as_view(), name="flash-promo-leave"),
]
