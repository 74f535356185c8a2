from django.urls import path

from promos.api.views import RetailerRedemptionsView
from .views import TopRetailersView, PointsAddView, PointsDeductView


urlpatterns = [
    path("top-retailers", TopRetailersView.as_view(), name="top-retailers"),
    path("retailer-redemptions", RetailerRedemptionsView.as_view(), name="retailer-redemptions"),
    path("points/add", PointsAddView.as_view(), name="points-add"),
    path("points/deduct", PointsDeductView.as_view(), name="points-deduct"),
]
