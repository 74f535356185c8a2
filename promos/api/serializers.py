from rest_framework import serializers

from ..models import FlashPromo, FlashPromoParticipant, PromoCode, PromoCodeRedemption


class PromoCodeSerializer(serializers.ModelSerializer):
    redeemedBy = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = PromoCode
        fields = ("id", "code", "points", "redeemedBy", "createdAt")

    def get_redeemedBy(self, obj: PromoCode):
        redemption = obj.redeemed_by
        if redemption is None:
            return None
        return {
            "consumerId": redemption.user_id,
            "redeemedAt": serializers.DateTimeField().to_representation(redemption.redeemed_at),
            "shopName": redemption.shop_name,
        }


class ConsumerRedemptionSerializer(serializers.ModelSerializer):
    """Admin view of a redemption with consumer and retailer details."""

    redeemedAt = serializers.DateTimeField(source="redeemed_at", read_only=True)
    shopName = serializers.CharField(source="shop_name", read_only=True)
    consumerId = serializers.IntegerField(source="user.id", read_only=True)
    consumerName = serializers.CharField(source="user.name", read_only=True)
    consumerEmail = serializers.EmailField(source="user.email", read_only=True)
    consumerPhone = serializers.CharField(source="user.phone_number", read_only=True)
    consumerLocation = serializers.SerializerMethodField()
    retailerId = serializers.SerializerMethodField()
    retailerName = serializers.SerializerMethodField()
    retailerEmail = serializers.SerializerMethodField()

    class Meta:
        model = PromoCodeRedemption
        fields = (
            "id",
            "code",
            "points",
            "redeemedAt",
            "shopName",
            "consumerId",
            "consumerName",
            "consumerEmail",
            "consumerPhone",
            "consumerLocation",
            "retailerId",
            "retailerName",
            "retailerEmail",
        )

    def get_consumerLocation(self, obj):
        parts = [p for p in (obj.user.city, obj.user.province) if p]
        return ", ".join(parts) or None

    def get_retailerId(self, obj):
        retailer = getattr(obj, "retailer", None)
        return retailer.id if retailer else None

    def get_retailerName(self, obj):
        retailer = getattr(obj, "retailer", None)
        return retailer.name if retailer else "Unknown Retailer"

    def get_retailerEmail(self, obj):
        retailer = getattr(obj, "retailer", None)
        return retailer.email if retailer else None


class GeneratePromoCodesSerializer(serializers.Serializer):
    count = serializers.IntegerField(min_value=1, max_value=1000, default=10)
    points = serializers.IntegerField(min_value=1, required=False)
    prefix = serializers.CharField(max_length=16, allow_blank=True, default="")
    length = serializers.IntegerField(min_value=6, max_value=26, default=10)


class FlashPromoParticipantSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    joinedAt = serializers.DateTimeField(source="joined_at", read_only=True)

    class Meta:
        model = FlashPromoParticipant
        fields = ("userId", "joinedAt")


class FlashPromoSerializer(serializers.ModelSerializer):
    startDate = serializers.DateTimeField(source="start_date")
    endDate = serializers.DateTimeField(source="end_date")
    maxParticipants = serializers.IntegerField(source="max_participants", min_value=1, default=10)
    currentParticipants = serializers.IntegerField(source="current_participants", read_only=True)
    multiplier = serializers.IntegerField(min_value=1, default=1)
    isActive = serializers.BooleanField(source="is_active", default=True)
    participants = FlashPromoParticipantSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = FlashPromo
        fields = (
            "id",
            "name",
            "startDate",
            "endDate",
            "maxParticipants",
            "currentParticipants",
            "multiplier",
            "prize",
            "isActive",
            "participants",
            "createdAt",
            "updatedAt",
        )

    def validate(self, attrs):
        start, end = attrs.get("start_date"), attrs.get("end_date")
        if start and end and end < start:
            raise serializers.ValidationError("endDate must be after startDate")
        return attrs


class FlashPromoStatusSerializer(serializers.Serializer):
    isActive = serializers.BooleanField()
