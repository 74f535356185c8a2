import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from utils.api import error_response, first_error, internal_error, validation_message
from utils.events import EventEmitterMixin

from ..models import FlashPromo, PromoCode
from ..service import (
    check_remaining_redemptions,
    delete_flash_promo,
    generate_promo_codes,
    import_promo_codes,
    join_flash_promo,
    leave_flash_promo,
    list_consumer_redemptions,
    list_flash_promos,
    purge_promo_codes,
    read_codes_from_spreadsheet,
    redeem_promo_code,
    set_flash_promo_status,
)
from .serializers import (
    ConsumerRedemptionSerializer,
    FlashPromoSerializer,
    FlashPromoStatusSerializer,
    GeneratePromoCodesSerializer,
    PromoCodeSerializer,
)


User = get_user_model()

logger = logging.getLogger(__name__)

TRUTHY = ("1", "true", "True", "yes")


def _as_bool(value) -> bool:
    return str(value) in TRUTHY


class PromoCodeListView(APIView):
    authentication_classes = [JWTAuthentication]

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [permissions.IsAdminUser()]
        return [permissions.AllowAny()]

    def get(self, request):
        try:
            qs = PromoCode.objects.select_related("redemption")
            data = PromoCodeSerializer(qs, many=True).data
        except Exception:
            logger.exception("Error fetching promo codes")
            return Response(
                {"success": False, "message": "Failed to fetch promo codes", "data": []},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"success": True, "count": len(data), "data": data})

    def delete(self, request):
        redeemed_only = _as_bool(request.query_params.get("redeemedOnly"))
        deleted = purge_promo_codes(redeemed_only=redeemed_only)
        return Response({"success": True, "deleted": deleted})


class PromoCodeUploadView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        upload = request.FILES.get("file")
        if upload is None:
            return Response(
                {"success": False, "message": "No file uploaded"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if upload.size > settings.PROMO_UPLOAD_MAX_BYTES:
            return Response(
                {"success": False, "message": "File too large"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        points = request.data.get("points")
        try:
            points = int(points) if points else None
            codes = read_codes_from_spreadsheet(upload, upload.name)
            results = import_promo_codes(codes, points=points)
        except ValueError:
            return Response(
                {"success": False, "message": "points must be numeric"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except DjangoValidationError as exc:
            return Response(
                {"success": False, "message": validation_message(exc)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except Exception:
            logger.exception("Error processing promo codes")
            return Response(
                {"success": False, "message": "Failed to process promo codes"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        results["errorDetails"] = results.pop("error_details")
        return Response(
            {
                "success": True,
                "message": "Promo codes processed successfully",
                "results": results,
            }
        )


class PromoCodeGenerateView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]

    def post(self, request):
        serializer = GeneratePromoCodesSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(first_error(serializer.errors))
        data = serializer.validated_data
        try:
            codes = generate_promo_codes(
                data["count"],
                points=data.get("points"),
                prefix=data["prefix"],
                length=data["length"],
            )
        except DjangoValidationError as exc:
            return error_response(validation_message(exc))
        return Response(
            {"success": True, "count": len(codes), "codes": codes},
            status=status.HTTP_201_CREATED,
        )


class RedeemPromoCodeView(EventEmitterMixin, APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        code = request.data.get("code")
        # consumerId 는 이전 클라이언트 호환용 별칭
        user_id = request.data.get("userId") or request.data.get("consumerId")
        shop_name = str(request.data.get("shopName") or "").strip()
        if not code or not user_id or not shop_name:
            return error_response(
                "Missing required fields: code, userId, and shopName are required"
            )

        try:
            result = redeem_promo_code(
                code=code,
                user_id=user_id,
                shop_name=shop_name,
                emitter=self.get_event_emitter(),
            )
        except PromoCode.DoesNotExist:
            return error_response("Invalid code", status.HTTP_404_NOT_FOUND)
        except User.DoesNotExist:
            return error_response("User not found", status.HTTP_404_NOT_FOUND)
        except (TypeError, ValueError):
            return error_response("userId is not a valid id")
        except DjangoValidationError as exc:
            return error_response(validation_message(exc))
        except Exception:
            return internal_error(request, "Error redeeming promo code")

        return Response(
            {
                "success": True,
                "message": "Promo code redeemed successfully",
                "points": result["points"],
                "userPoints": result["user_points"],
                "remainingRedemptions": result["remaining_redemptions"],
                "dailyLimitReached": result["daily_limit_reached"],
                "promoCode": PromoCodeSerializer(result["promo_code"]).data,
            }
        )


class CheckRedemptionsView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request, user_id):
        try:
            data = check_remaining_redemptions(user_id)
        except User.DoesNotExist:
            return error_response("User not found", status.HTTP_404_NOT_FOUND)
        except (TypeError, ValueError):
            return error_response("userId is not a valid id")
        return Response(
            {
                "remainingRedemptions": data["remaining_redemptions"],
                "dailyLimitReached": data["daily_limit_reached"],
            }
        )


class FlashPromoListView(APIView):
    authentication_classes = [JWTAuthentication]

    def get_permissions(self):
        if self.request.method == "POST":
            return [permissions.IsAdminUser()]
        return [permissions.AllowAny()]

    def get(self, request):
        promos = list_flash_promos(active_only=_as_bool(request.query_params.get("active")))
        return Response(FlashPromoSerializer(promos, many=True).data)

    def post(self, request):
        serializer = FlashPromoSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(first_error(serializer.errors))
        promo = serializer.save()
        logger.info("Flash promo created id=%s name=%s", promo.id, promo.name)
        return Response(FlashPromoSerializer(promo).data, status=status.HTTP_201_CREATED)


class FlashPromoDetailView(APIView):
    authentication_classes = [JWTAuthentication]

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [permissions.IsAdminUser()]
        return [permissions.AllowAny()]

    def get(self, request, pk):
        try:
            promo = FlashPromo.objects.prefetch_related("participants").get(pk=pk)
        except FlashPromo.DoesNotExist:
            return error_response("Flash promo not found", status.HTTP_404_NOT_FOUND)
        return Response(FlashPromoSerializer(promo).data)

    def delete(self, request, pk):
        try:
            delete_flash_promo(pk)
        except FlashPromo.DoesNotExist:
            return error_response("Flash promo not found", status.HTTP_404_NOT_FOUND)
        return Response({"message": "Flash promo deleted"})


class FlashPromoStatusView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]

    def patch(self, request, pk):
        serializer = FlashPromoStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("isActive field is required")
        try:
            promo = set_flash_promo_status(pk, serializer.validated_data["isActive"])
        except FlashPromo.DoesNotExist:
            return error_response("Flash promo not found", status.HTTP_404_NOT_FOUND)
        return Response(FlashPromoSerializer(promo).data)


class _FlashPromoMembershipView(EventEmitterMixin, APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAuthenticated]

    def perform(self, pk, user_id):
        raise NotImplementedError

    def post(self, request, pk):
        user_id = request.data.get("userId")
        if not user_id:
            return error_response("User ID is required")
        try:
            promo = self.perform(pk, user_id)
        except FlashPromo.DoesNotExist:
            return error_response("Flash promo not found", status.HTTP_404_NOT_FOUND)
        except User.DoesNotExist:
            return error_response("User not found", status.HTTP_404_NOT_FOUND)
        except (TypeError, ValueError):
            return error_response("userId is not a valid id")
        except DjangoValidationError as exc:
            return error_response(validation_message(exc))
        except Exception:
            return internal_error(request, "Error updating flash promo participants")
        promo = FlashPromo.objects.prefetch_related("participants").get(pk=promo.pk)
        return Response(FlashPromoSerializer(promo).data)


class FlashPromoJoinView(_FlashPromoMembershipView):
    def perform(self, pk, user_id):
        return join_flash_promo(pk, user_id, emitter=self.get_event_emitter())


class FlashPromoLeaveView(_FlashPromoMembershipView):
    def perform(self, pk, user_id):
        return leave_flash_promo(pk, user_id, emitter=self.get_event_emitter())


class RetailerRedemptionsView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]

    def get(self, request):
        try:
            redemptions = list_consumer_redemptions()
            data = ConsumerRedemptionSerializer(redemptions, many=True).data
        except Exception:
            logger.exception("Error fetching redemptions")
            return Response(
                {"success": False, "message": "Error fetching redemptions"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response({"success": True, "totalRedemptions": len(data), "redemptions": data})
