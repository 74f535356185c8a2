import logging

from django.contrib.auth import authenticate
from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

from utils.api import error_response, first_error, internal_error, validation_message
from utils.events import EventEmitterMixin, emit_on_commit

from .models import User
from .serializers import (
    LoginSerializer,
    PointsAdjustSerializer,
    RegisterSerializer,
    RetailerSerializer,
    UserSerializer,
)
from .service import adjust_points, top_retailers, verified_retailers
from .utils import generate_tokens_for_user


logger = logging.getLogger(__name__)


class RegisterView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        if not serializer.is_valid():
            errors = serializer.errors
            email_errors = errors.get("email") or []
            if any("already exists" in str(e) for e in email_errors):
                return error_response(str(email_errors[0]), status.HTTP_409_CONFLICT)
            return error_response(first_error(errors))
        user = serializer.save()
        logger.info("User registered id=%s type=%s", user.id, user.user_type)
        return Response(
            {"message": "User Created Successfully", "user": UserSerializer(user).data},
            status=status.HTTP_201_CREATED,
        )


class LoginView(EventEmitterMixin, APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(first_error(serializer.errors))

        user = authenticate(
            request,
            email=serializer.validated_data["email"].lower(),
            password=serializer.validated_data["password"],
        )
        if user is None:
            return error_response("Invalid email or password")

        emit_on_commit(
            self.get_event_emitter(),
            "userActivity",
            {"action": "login", "user": user.name, "timestamp": timezone.now()},
        )
        return Response(
            {
                "token": generate_tokens_for_user(user),
                "user": UserSerializer(user).data,
                "message": "Logged In Successfully",
            },
            status=status.HTTP_200_OK,
        )


class MeView(APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)


class TopRetailersView(generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = RetailerSerializer

    def get_queryset(self):
        return top_retailers()


class VerifiedRetailersView(generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = RetailerSerializer

    def get_queryset(self):
        return verified_retailers()


class _PointsAdjustView(EventEmitterMixin, APIView):
    authentication_classes = [JWTAuthentication]
    permission_classes = [permissions.IsAdminUser]
    sign = 1
    success_message = ""

    def post(self, request):
        serializer = PointsAdjustSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response(first_error(serializer.errors))
        data = serializer.validated_data
        try:
            user = adjust_points(
                data["userId"],
                self.sign * data["points"],
                emitter=self.get_event_emitter(),
            )
        except User.DoesNotExist:
            return error_response("User not found", status.HTTP_404_NOT_FOUND)
        except DjangoValidationError as exc:
            return error_response(validation_message(exc))
        except Exception:
            return internal_error(request, "Error adjusting points")
        return Response(
            {"success": True, "message": self.success_message, "newPoints": user.points}
        )


class PointsAddView(_PointsAdjustView):
    sign = 1
    success_message = "Points added successfully"


class PointsDeductView(_PointsAdjustView):
    sign = -1
    success_message = "Points deducted successfully"
