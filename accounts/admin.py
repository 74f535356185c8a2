from django import forms
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.contrib.auth.forms import ReadOnlyPasswordHashField

from .models import User


class UserCreationForm(forms.ModelForm):
    password1 = forms.CharField(label="Password", widget=forms.PasswordInput)
    password2 = forms.CharField(label="Password confirmation", widget=forms.PasswordInput)

    class Meta:
        model = User
        fields = ("email", "name", "user_type", "shop_name", "is_staff", "is_superuser")

    def clean_password2(self):
        password1 = self.cleaned_data.get("password1")
        password2 = self.cleaned_data.get("password2")
        if password1 and password2 and password1 != password2:
            raise forms.ValidationError("The two password fields did not match.")
        return password2

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data["password1"])
        if commit:
            user.save()
        return user


class UserChangeForm(forms.ModelForm):
    password = ReadOnlyPasswordHashField(label="Password")

    class Meta:
        model = User
        fields = (
            "email",
            "password",
            "name",
            "user_type",
            "shop_name",
            "points",
            "redemption_count",
            "last_redemption_date",
            "daily_limit_reached",
            "verified",
            "user_status",
            "rank",
            "is_active",
            "is_staff",
            "is_superuser",
            "groups",
            "user_permissions",
        )

    def clean_password(self):
        return self.initial.get("password")


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    add_form = UserCreationForm
    form = UserChangeForm
    model = User

    ordering = ("-created_at",)
    list_display = (
        "email",
        "name",
        "user_type",
        "shop_name",
        "points",
        "redemption_count",
        "last_redemption_date",
        "verified",
        "is_staff",
    )
    list_filter = ("user_type", "verified", "user_status", "rank", "is_staff")
    search_fields = ("email", "name", "shop_name")
    readonly_fields = ("created_at", "updated_at", "last_login")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "user_type", "shop_name")}),
        ("Loyalty", {"fields": ("points", "redemption_count", "last_redemption_date", "daily_limit_reached", "rank")}),
        ("Verification", {"fields": ("verified", "user_status")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Timestamps", {"fields": ("last_login", "created_at", "updated_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "name", "user_type", "shop_name", "password1", "password2", "is_staff", "is_superuser"),
            },
        ),
    )
