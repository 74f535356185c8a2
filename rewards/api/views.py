import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from utils.api import error_response, first_error, internal_error, validation_message
from utils.events import EventEmitterMixin

from ..models import Reward
from ..service import create_reward, delete_reward, list_rewards, redeem_reward
from .serializers import RewardSerializer


User = get_user_model()

logger = logging.getLogger(__name__)


class RewardListView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.AllowAny]

    def get(self, request):
        rewards = list_rewards().prefetch_related("claims")
        return Response(RewardSerializer(rewards, many=True).data)


class RewardCreateView(EventEmitterMixin, APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]

    def post(self, request):
        serializer = RewardSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(first_error(serializer.errors))
        data = serializer.validated_data
        try:
            reward = create_reward(
                name=data["name"],
                points_required=data["points_required"],
                stock_available=data.get("stock_available", 0),
                reward_type=data["type"],
                emitter=self.get_event_emitter(),
            )
        except DjangoValidationError as exc:
            return error_response(validation_message(exc))
        return Response(
            {"message": "Reward created successfully!", "reward": RewardSerializer(reward).data},
            status=status.HTTP_201_CREATED,
        )


class RewardDeleteView(EventEmitterMixin, APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]

    def delete(self, request, reward_id):
        try:
            delete_reward(reward_id, emitter=self.get_event_emitter())
        except Reward.DoesNotExist:
            return error_response("Reward not found", status.HTTP_404_NOT_FOUND)
        return Response({"message": "Reward deleted successfully"})


class RedeemRewardView(EventEmitterMixin, APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        user_id = request.data.get("userId")
        reward_id = request.data.get("rewardsid")
        if not user_id or not reward_id:
            return error_response("User ID and Reward ID are required.")

        try:
            result = redeem_reward(user_id, reward_id, emitter=self.get_event_emitter())
        except User.DoesNotExist:
            return error_response("User not found", status.HTTP_404_NOT_FOUND)
        except Reward.DoesNotExist:
            return error_response("Reward not found", status.HTTP_404_NOT_FOUND)
        except (TypeError, ValueError):
            return error_response("userId and rewardsid must be valid ids")
        except DjangoValidationError as exc:
            return error_response(validation_message(exc))
        except Exception:
            return internal_error(request, "Error redeeming reward")

        return Response(
            {
                "message": "Reward redeemed successfully!",
                "redemptionDate": result["redemption_date"],
                "rewardsname": result["reward"].name,
            }
        )
