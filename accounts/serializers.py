from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import User


class UserSerializer(serializers.ModelSerializer):
    userType = serializers.CharField(source='user_type', read_only=True)
    shopName = serializers.CharField(source='shop_name', read_only=True)
    redemptionCount = serializers.IntegerField(source='redemption_count', read_only=True)
    lastRedemptionDate = serializers.DateTimeField(source='last_redemption_date', read_only=True)
    dailyLimitReached = serializers.BooleanField(source='daily_limit_reached', read_only=True)
    userStatus = serializers.CharField(source='user_status', read_only=True)
    rewardsclaimed = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            'id',
            'name',
            'email',
            'userType',
            'shopName',
            'points',
            'redemptionCount',
            'lastRedemptionDate',
            'dailyLimitReached',
            'verified',
            'userStatus',
            'rank',
            'rewardsclaimed',
        ]
        read_only_fields = fields

    def get_rewardsclaimed(self, obj):
        return [
            {'rewardsid': claim.reward_id, 'rewardsname': claim.reward_name}
            for claim in obj.reward_claims.all()
        ]


class RetailerSerializer(serializers.ModelSerializer):
    shopName = serializers.CharField(source='shop_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'shopName', 'points', 'rank', 'city', 'province', 'verified']
        read_only_fields = fields


class RegisterSerializer(serializers.ModelSerializer):
    """회원가입 요청 검증"""

    password = serializers.CharField(write_only=True)
    userType = serializers.ChoiceField(source='user_type', choices=User.USER_TYPES)
    shopName = serializers.CharField(source='shop_name', required=False, allow_blank=True, max_length=255)
    phoneNumber = serializers.CharField(source='phone_number', required=False, allow_blank=True, max_length=32)

    class Meta:
        model = User
        fields = [
            'name', 'email', 'password', 'userType', 'shopName',
            'phoneNumber', 'province', 'city', 'birthdate',
        ]
        # 중복 이메일은 validate_email 에서 대소문자 무시하고 검사
        extra_kwargs = {'email': {'validators': []}}

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError('User with given email already exists')
        return value

    def validate_password(self, value):
        validate_password(value)
        return value

    def validate(self, attrs):
        if attrs.get('user_type') == User.RETAILER:
            if not (attrs.get('shop_name') or '').strip():
                raise serializers.ValidationError({'shopName': 'Shop name is required for retailers'})
        else:
            attrs['shop_name'] = ''
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class PointsAdjustSerializer(serializers.Serializer):
    userId = serializers.IntegerField()
    points = serializers.IntegerField(min_value=1)
