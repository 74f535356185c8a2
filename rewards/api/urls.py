from django.urls import path

from .views import RewardListView, RewardCreateView, RewardDeleteView, RedeemRewardView

urlpatterns = [
    path("rewards", RewardListView.as_view(), name="reward-list"),
    path("create-reward", RewardCreateView.as_view(), name="reward-create"),
    path("delete-reward/<int:reward_id>", RewardDeleteView.as_view(), name="reward-delete"),
    path("redeem-reward", RedeemRewardView.as_view(), name="reward-redeem"),
]
