from django.conf import settings
from django.db import models
from django.contrib.auth.models import (
    AbstractBaseUser, PermissionsMixin, BaseUserManager
)


def default_redemption_count():
    return settings.PROMO_DAILY_REDEMPTION_LIMIT


class UserManager(BaseUserManager):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Users must have an email')
        user = self.model(email=self.normalize_email(email).lower(), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('name', 'Administrator')
        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')
        return self.create_user(email, password, **extra_fields)

    def retailers(self):
        return self.filter(user_type=User.RETAILER)


class User(AbstractBaseUser, PermissionsMixin):
    CONSUMER = 'Consumer'
    RETAILER = 'Retailer'
    USER_TYPES = (
        (CONSUMER, 'Consumer'),
        (RETAILER, 'Retailer'),
    )
    USER_STATUS = (
        ('Not Verified', 'Not Verified'),
        ('Verified', 'Verified'),
    )
    RANKS = (
        ('Bronze', 'Bronze'),
        ('Silver', 'Silver'),
        ('Gold', 'Gold'),
    )

    email = models.EmailField(unique=True, db_index=True)
    name = models.CharField(max_length=255)
    user_type = models.CharField(max_length=10, choices=USER_TYPES, default=CONSUMER)
    shop_name = models.CharField(max_length=255, blank=True, default='')
    phone_number = models.CharField(max_length=32, blank=True, default='')
    province = models.CharField(max_length=120, blank=True, default='')
    city = models.CharField(max_length=120, blank=True, default='')
    birthdate = models.DateField(null=True, blank=True)

    points = models.PositiveIntegerField(default=50)
    # 오늘 남은 프로모 코드 교환 횟수 (last_redemption_date 기준 날짜)
    redemption_count = models.PositiveSmallIntegerField(default=default_redemption_count)
    last_redemption_date = models.DateTimeField(null=True, blank=True)
    daily_limit_reached = models.BooleanField(default=False)

    verified = models.BooleanField(default=False)
    user_status = models.CharField(max_length=12, choices=USER_STATUS, default='Not Verified')
    rank = models.CharField(max_length=6, choices=RANKS, default='Bronze')

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = UserManager()

    @property
    def is_retailer(self):
        return self.user_type == self.RETAILER

    @property
    def display_name(self):
        return self.name or self.email

    def __str__(self):
        return f"User {self.email}"
