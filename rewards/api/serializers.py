from rest_framework import serializers

from ..models import Reward, RewardClaim


class RewardClaimSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    name = serializers.CharField(source="user_name", read_only=True)
    claimedAt = serializers.DateTimeField(source="claimed_at", read_only=True)

    class Meta:
        model = RewardClaim
        fields = ("userId", "name", "claimedAt")


class RewardSerializer(serializers.ModelSerializer):
    pointsRequired = serializers.IntegerField(source="points_required", min_value=0)
    stockAvailable = serializers.IntegerField(source="stock_available", min_value=0, default=0)
    type = serializers.ChoiceField(choices=Reward.TYPES)
    UsersClaimed = RewardClaimSerializer(source="claims", many=True, read_only=True)

    class Meta:
        model = Reward
        fields = ("id", "name", "pointsRequired", "stockAvailable", "type", "UsersClaimed")
        # 이름 중복은 서비스에서 전용 메시지로 거부
        extra_kwargs = {"name": {"validators": []}}
