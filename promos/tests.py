import io
from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace
from unittest.mock import patch

import pandas as pd
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APITestCase

from promos import service as promos_service
from promos.api.views import RedeemPromoCodeView
from promos.models import FlashPromo, FlashPromoParticipant, PromoCode, PromoCodeRedemption
from promos.service import (
    check_remaining_redemptions,
    generate_promo_codes,
    import_promo_codes,
    join_flash_promo,
    leave_flash_promo,
    list_consumer_redemptions,
    purge_promo_codes,
    read_codes_from_spreadsheet,
    redeem_promo_code,
)
from promos.tasks import deactivate_ended_flash_promos
from utils.events import EventEmitter


User = get_user_model()

NOON = datetime(2024, 5, 1, 12, 0, tzinfo=dt_timezone.utc)


class RecordingEmitter(EventEmitter):
    def __init__(self):
        self.events = []

    def emit(self, event, payload, room=None):
        self.events.append((event, payload, room))


class InMemoryRedis:
    def __init__(self):
        self.store = {}

    def set(self, name, value, nx=False, ex=None):
        if nx and name in self.store:
            return False
        self.store[name] = value.encode()
        return True

    def get(self, name):
        return self.store.get(name)

    def delete(self, name):
        self.store.pop(name, None)


class UnreachableRedis:
    def set(self, *args, **kwargs):
        raise ConnectionError("Error 111 connecting to localhost:6379")


def make_user(email="consumer@example.com", **extra):
    extra.setdefault("name", "Consumer")
    return User.objects.create_user(email=email, password="Str0ng-pass!", **extra)


@override_settings(TIME_ZONE="UTC", PROMO_DAILY_REDEMPTION_LIMIT=3)
class RedeemPromoCodeServiceTests(TestCase):
    def setUp(self):
        self.user = make_user()
        for idx in range(5):
            PromoCode.objects.create(code=f"CODE{idx}", points=10)

    def redeem(self, code, now=NOON, **kwargs):
        return redeem_promo_code(code=code, user_id=self.user.id, shop_name="Corner Shop", now=now, **kwargs)

    def test_redeem_credits_points_and_records_redemption(self):
        result = self.redeem("code0")

        self.user.refresh_from_db()
        self.assertEqual(result["points"], 10)
        self.assertEqual(self.user.points, 60)
        self.assertEqual(self.user.redemption_count, 2)
        self.assertEqual(self.user.last_redemption_date, NOON)
        redemption = PromoCode.objects.get(code="CODE0").redeemed_by
        self.assertEqual(redemption.user, self.user)
        self.assertEqual(redemption.shop_name, "Corner Shop")

    def test_second_redeem_of_same_code_fails(self):
        self.redeem("CODE0")
        other = make_user("other@example.com")

        with self.assertRaises(ValidationError) as ctx:
            redeem_promo_code(code="CODE0", user_id=other.id, shop_name="Other", now=NOON)

        self.assertEqual(ctx.exception.code, "already_redeemed")
        self.assertEqual(ctx.exception.messages[0], "Code already redeemed")
        other.refresh_from_db()
        self.assertEqual(other.points, 50)
        self.assertEqual(PromoCodeRedemption.objects.count(), 1)

    def test_fourth_redemption_in_one_day_is_rejected(self):
        for idx in range(3):
            self.redeem(f"CODE{idx}", now=NOON + timedelta(minutes=idx))

        with self.assertRaises(ValidationError) as ctx:
            self.redeem("CODE3", now=NOON + timedelta(hours=1))

        self.assertEqual(ctx.exception.code, "daily_limit_reached")
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 80)
        self.assertTrue(self.user.daily_limit_reached)
        self.assertFalse(PromoCode.objects.get(code="CODE3").is_redeemed)

    def test_limit_resets_on_next_calendar_day(self):
        late = datetime(2024, 5, 1, 23, 50, tzinfo=dt_timezone.utc)
        for idx in range(3):
            self.redeem(f"CODE{idx}", now=late + timedelta(minutes=idx))

        after_midnight = datetime(2024, 5, 2, 0, 10, tzinfo=dt_timezone.utc)
        result = self.redeem("CODE3", now=after_midnight)

        self.assertEqual(result["remaining_redemptions"], 2)
        self.assertFalse(result["daily_limit_reached"])

    def test_last_remaining_redemption_reaches_daily_limit(self):
        PromoCode.objects.create(code="BONUS25", points=25)
        self.user.redemption_count = 1
        self.user.last_redemption_date = NOON - timedelta(hours=1)
        self.user.save()

        result = self.redeem("BONUS25")

        self.assertEqual(result["remaining_redemptions"], 0)
        self.assertTrue(result["daily_limit_reached"])
        self.assertEqual(result["user_points"], 75)

    def test_unknown_code_and_user(self):
        with self.assertRaises(PromoCode.DoesNotExist):
            self.redeem("NOPE")
        with self.assertRaises(User.DoesNotExist):
            redeem_promo_code(code="CODE0", user_id=9999, shop_name="x", now=NOON)

    def test_events_are_emitted_after_commit(self):
        emitter = RecordingEmitter()
        with self.captureOnCommitCallbacks(execute=True):
            self.redeem("CODE0", emitter=emitter)

        names = [event for event, _, _ in emitter.events]
        self.assertEqual(names, ["pointsUpdate", "promoCodeRedeemed"])
        _, payload, room = emitter.events[0]
        self.assertEqual(room, f"user:{self.user.id}")
        self.assertEqual(payload["newPoints"], 60)

    def test_no_events_when_redemption_fails(self):
        emitter = RecordingEmitter()
        self.redeem("CODE0")
        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(ValidationError):
                self.redeem("CODE0", emitter=emitter)
        self.assertEqual(emitter.events, [])

    def test_check_remaining_redemptions_does_not_write(self):
        self.user.redemption_count = 0
        self.user.daily_limit_reached = True
        self.user.last_redemption_date = NOON - timedelta(days=1)
        self.user.save()

        data = check_remaining_redemptions(self.user.id, now=NOON)

        self.assertEqual(data, {"remaining_redemptions": 3, "daily_limit_reached": False})
        self.user.refresh_from_db()
        self.assertEqual(self.user.redemption_count, 0)


class RedeemPromoCodeApiTests(APITestCase):
    url = "/api/promo-codes/redeem"

    def setUp(self):
        self.user = make_user()
        self.client.force_authenticate(self.user)
        PromoCode.objects.create(code="WELCOME", points=15)

    def test_redeem_success(self):
        response = self.client.post(
            self.url,
            {"code": " welcome ", "userId": self.user.id, "shopName": "Corner Shop"},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["points"], 15)
        self.assertEqual(response.data["userPoints"], 65)
        self.assertEqual(response.data["remainingRedemptions"], 2)
        self.assertFalse(response.data["dailyLimitReached"])
        self.assertEqual(response.data["promoCode"]["redeemedBy"]["consumerId"], self.user.id)

    def test_missing_fields(self):
        response = self.client.post(self.url, {"code": "WELCOME"}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_blank_shop_name_is_missing(self):
        response = self.client.post(
            self.url,
            {"code": "WELCOME", "userId": self.user.id, "shopName": "   "},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(PromoCodeRedemption.objects.exists())

    def test_invalid_code(self):
        response = self.client.post(
            self.url,
            {"code": "NOPE", "userId": self.user.id, "shopName": "Corner Shop"},
            format="json",
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["message"], "Invalid code")

    def test_unknown_user(self):
        response = self.client.post(
            self.url,
            {"code": "WELCOME", "userId": 9999, "shopName": "Corner Shop"},
            format="json",
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["message"], "User not found")

    def test_already_redeemed(self):
        body = {"code": "WELCOME", "userId": self.user.id, "shopName": "Corner Shop"}
        self.client.post(self.url, body, format="json")
        response = self.client.post(self.url, body, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "Code already redeemed")

    def test_requires_authentication(self):
        self.client.force_authenticate(None)
        response = self.client.post(
            self.url,
            {"code": "WELCOME", "userId": self.user.id, "shopName": "Corner Shop"},
            format="json",
        )
        self.assertEqual(response.status_code, 401)

    def test_view_emitter_receives_events(self):
        emitter = RecordingEmitter()
        with patch.object(RedeemPromoCodeView, "event_emitter", emitter):
            with self.captureOnCommitCallbacks(execute=True):
                self.client.post(
                    self.url,
                    {"code": "WELCOME", "userId": self.user.id, "shopName": "Corner Shop"},
                    format="json",
                )
        self.assertIn("promoCodeRedeemed", [event for event, _, _ in emitter.events])

    def test_check_redemptions(self):
        response = self.client.get(f"/api/promo-codes/check-redemptions/{self.user.id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {"remainingRedemptions": 3, "dailyLimitReached": False})

        response = self.client.get("/api/promo-codes/check-redemptions/not-a-number")
        self.assertEqual(response.status_code, 400)


class PromoCodeAdministrationTests(TestCase):
    def test_read_codes_from_csv(self):
        fileobj = io.BytesIO(b"abc1,ABC1\nxyz2,\n  ,def3\n")
        codes = read_codes_from_spreadsheet(fileobj, "codes.csv")
        self.assertEqual(codes, ["ABC1", "XYZ2", "DEF3"])

    def test_read_codes_from_csv_with_uneven_rows(self):
        fileobj = io.BytesIO(b"AAA\nBBB,CCC\nddd,,eee,fff\n")
        codes = read_codes_from_spreadsheet(fileobj, "codes.csv")
        self.assertEqual(codes, ["AAA", "BBB", "CCC", "DDD", "EEE", "FFF"])

    def test_consumer_redemptions_resolve_retailer(self):
        retailer = make_user(
            "shop@example.com", name="Corner owner", user_type=User.RETAILER, shop_name="Corner Shop"
        )
        consumer = make_user(phone_number="010-1234", city="Daegu")
        PromoCode.objects.create(code="FIRST", points=10)
        PromoCode.objects.create(code="SECOND", points=20)
        redeem_promo_code(code="FIRST", user_id=consumer.id, shop_name="Corner Shop", now=NOON)
        redeem_promo_code(
            code="SECOND", user_id=consumer.id, shop_name="Gone Shop", now=NOON + timedelta(hours=1)
        )

        redemptions = list_consumer_redemptions()

        self.assertEqual([r.code for r in redemptions], ["SECOND", "FIRST"])
        self.assertIsNone(redemptions[0].retailer)
        self.assertEqual(redemptions[1].retailer, retailer)

    def test_read_codes_from_xlsx(self):
        buffer = io.BytesIO()
        pd.DataFrame([["first", None], ["second", "third"]]).to_excel(
            buffer, header=False, index=False
        )
        buffer.seek(0)
        codes = read_codes_from_spreadsheet(buffer, "codes.xlsx")
        self.assertEqual(sorted(codes), ["FIRST", "SECOND", "THIRD"])

    def test_rejects_other_file_types(self):
        with self.assertRaises(ValidationError) as ctx:
            read_codes_from_spreadsheet(io.BytesIO(b"abc"), "codes.txt")
        self.assertEqual(ctx.exception.code, "invalid_file")

    def test_empty_file(self):
        with self.assertRaises(ValidationError) as ctx:
            read_codes_from_spreadsheet(io.BytesIO(b""), "codes.csv")
        self.assertEqual(ctx.exception.code, "empty_file")

    @override_settings(PROMO_DEFAULT_POINTS=10)
    def test_import_counts_added_updated_duplicates(self):
        PromoCode.objects.create(code="OLD", points=0)
        PromoCode.objects.create(code="KEEP", points=30)

        results = import_promo_codes(["NEW1", "OLD", "KEEP"])

        self.assertEqual(results["added"], 1)
        self.assertEqual(results["updated"], 1)
        self.assertEqual(results["duplicates"], 1)
        self.assertEqual(results["errors"], 0)
        self.assertEqual(PromoCode.objects.get(code="NEW1").points, 10)
        self.assertEqual(PromoCode.objects.get(code="OLD").points, 10)
        self.assertEqual(PromoCode.objects.get(code="KEEP").points, 30)

    def test_generate_promo_codes(self):
        codes = generate_promo_codes(5, points=20, prefix="sp", length=8)

        self.assertEqual(len(set(codes)), 5)
        for code in codes:
            self.assertTrue(code.startswith("SP"))
            self.assertEqual(len(code), 10)
        self.assertEqual(PromoCode.objects.filter(points=20).count(), 5)

    def test_purge_keeps_redemption_history(self):
        user = make_user()
        PromoCode.objects.create(code="USED", points=10)
        PromoCode.objects.create(code="FRESH", points=10)
        redeem_promo_code(code="USED", user_id=user.id, shop_name="Shop")

        deleted = purge_promo_codes(redeemed_only=True)

        self.assertEqual(deleted, 1)
        self.assertEqual(list(PromoCode.objects.values_list("code", flat=True)), ["FRESH"])
        history = PromoCodeRedemption.objects.get()
        self.assertIsNone(history.promo_code)
        self.assertEqual(history.code, "USED")

    def test_generate_command(self):
        out = io.StringIO()
        call_command("generate_promo_codes", "--count", "3", stdout=out)
        self.assertEqual(PromoCode.objects.count(), 3)
        self.assertIn("Generated 3 promo codes", out.getvalue())

    def test_purge_command_with_yes(self):
        PromoCode.objects.create(code="A1", points=10)
        out = io.StringIO()
        call_command("purge_promo_codes", "--yes", stdout=out)
        self.assertEqual(PromoCode.objects.count(), 0)


class PromoCodeAdminApiTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password="Str0ng-pass!")
        self.client.force_authenticate(self.admin)

    def test_upload_csv(self):
        upload = SimpleUploadedFile("codes.csv", b"aaa111\nbbb222\naaa111\n", content_type="text/csv")
        response = self.client.post("/api/promo-codes/upload", {"file": upload}, format="multipart")

        self.assertEqual(response.status_code, 200)
        results = response.data["results"]
        self.assertEqual(results["total"], 2)
        self.assertEqual(results["added"], 2)
        self.assertEqual(results["errorDetails"], [])

    def test_upload_without_file(self):
        response = self.client.post("/api/promo-codes/upload", {}, format="multipart")
        self.assertEqual(response.status_code, 400)

    def test_list_and_generate(self):
        response = self.client.post("/api/promo-codes/generate", {"count": 2}, format="json")
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["count"], 2)

        response = self.client.get("/api/promo-codes")
        self.assertEqual(response.data["count"], 2)
        self.assertIsNone(response.data["data"][0]["redeemedBy"])

    def test_purge_requires_admin(self):
        PromoCode.objects.create(code="A1", points=10)
        self.client.force_authenticate(make_user())
        response = self.client.delete("/api/promo-codes")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(PromoCode.objects.count(), 1)

    def test_retailer_redemptions(self):
        make_user("shop@example.com", name="Corner owner", user_type=User.RETAILER, shop_name="Corner Shop")
        consumer = make_user(city="Daegu", province="Gyeongbuk")
        PromoCode.objects.create(code="FIRST", points=10)
        PromoCode.objects.create(code="SECOND", points=20)
        redeem_promo_code(code="FIRST", user_id=consumer.id, shop_name="Corner Shop")
        redeem_promo_code(code="SECOND", user_id=consumer.id, shop_name="Gone Shop")

        response = self.client.get("/api/users/retailer-redemptions")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["totalRedemptions"], 2)
        by_code = {r["code"]: r for r in response.data["redemptions"]}
        self.assertEqual(by_code["FIRST"]["retailerName"], "Corner owner")
        self.assertEqual(by_code["FIRST"]["consumerEmail"], "consumer@example.com")
        self.assertEqual(by_code["FIRST"]["consumerLocation"], "Daegu, Gyeongbuk")
        self.assertEqual(by_code["SECOND"]["retailerName"], "Unknown Retailer")
        self.assertIsNone(by_code["SECOND"]["retailerId"])

    def test_retailer_redemptions_requires_admin(self):
        self.client.force_authenticate(make_user())
        response = self.client.get("/api/users/retailer-redemptions")
        self.assertEqual(response.status_code, 403)


class FlashPromoServiceTests(TestCase):
    def setUp(self):
        now = timezone.now()
        self.promo = FlashPromo.objects.create(
            name="Lunch rush",
            start_date=now - timedelta(hours=1),
            end_date=now + timedelta(hours=1),
            max_participants=1,
            prize="Free coffee",
        )
        self.user = make_user()

    def test_join_fills_and_deactivates(self):
        emitter = RecordingEmitter()
        with self.captureOnCommitCallbacks(execute=True):
            promo = join_flash_promo(self.promo.id, self.user.id, emitter=emitter)

        self.assertEqual(promo.current_participants, 1)
        self.assertFalse(promo.is_active)
        self.assertEqual(emitter.events[0][0], "flashPromoJoined")

    def test_join_full_promo(self):
        join_flash_promo(self.promo.id, self.user.id)
        other = make_user("other@example.com")

        with self.assertRaises(ValidationError) as ctx:
            join_flash_promo(self.promo.id, other.id)

        self.assertEqual(ctx.exception.code, "promo_full")
        self.assertEqual(ctx.exception.messages[0], "This flash promo is full")

    def test_join_twice(self):
        self.promo.max_participants = 5
        self.promo.save()
        join_flash_promo(self.promo.id, self.user.id)

        with self.assertRaises(ValidationError) as ctx:
            join_flash_promo(self.promo.id, self.user.id)

        self.assertEqual(ctx.exception.code, "already_joined")
        self.assertEqual(FlashPromoParticipant.objects.count(), 1)

    def test_join_inactive_or_outside_window(self):
        self.promo.max_participants = 5
        self.promo.save()

        with self.assertRaises(ValidationError) as ctx:
            join_flash_promo(self.promo.id, self.user.id, now=self.promo.end_date + timedelta(minutes=1))
        self.assertEqual(ctx.exception.code, "not_active")

        self.promo.is_active = False
        self.promo.save()
        with self.assertRaises(ValidationError) as ctx:
            join_flash_promo(self.promo.id, self.user.id)
        self.assertEqual(ctx.exception.code, "not_active")

    def test_leave(self):
        self.promo.max_participants = 5
        self.promo.save()
        join_flash_promo(self.promo.id, self.user.id)

        promo = leave_flash_promo(self.promo.id, self.user.id)
        self.assertEqual(promo.current_participants, 0)

        with self.assertRaises(ValidationError) as ctx:
            leave_flash_promo(self.promo.id, self.user.id)
        self.assertEqual(ctx.exception.code, "not_participant")

    def test_leave_reopens_full_promo(self):
        join_flash_promo(self.promo.id, self.user.id)
        self.promo.refresh_from_db()
        self.assertFalse(self.promo.is_active)

        promo = leave_flash_promo(self.promo.id, self.user.id)
        self.assertTrue(promo.is_active)

        other = make_user("other@example.com")
        promo = join_flash_promo(self.promo.id, other.id)
        self.assertEqual(promo.current_participants, 1)

    def test_leave_after_end_keeps_promo_closed(self):
        join_flash_promo(self.promo.id, self.user.id)

        promo = leave_flash_promo(
            self.promo.id, self.user.id, now=self.promo.end_date + timedelta(minutes=1)
        )
        self.assertFalse(promo.is_active)

    def test_leave_keeps_admin_deactivated_promo_closed(self):
        self.promo.max_participants = 5
        self.promo.save()
        join_flash_promo(self.promo.id, self.user.id)
        FlashPromo.objects.filter(pk=self.promo.pk).update(is_active=False)

        promo = leave_flash_promo(self.promo.id, self.user.id)
        self.assertFalse(promo.is_active)

    def test_join_when_redis_is_unreachable(self):
        broken = SimpleNamespace(get_client=lambda write: UnreachableRedis())
        with patch("promos.utils.cache", SimpleNamespace(client=broken)):
            promo = join_flash_promo(self.promo.id, self.user.id)
        self.assertEqual(promo.current_participants, 1)

    def test_redis_lock_held_until_join_returns(self):
        redis = InMemoryRedis()
        key = f"lock:flash-promo:{self.promo.id}"
        real_join = promos_service._join_flash_promo

        def join_and_check_lock(*args, **kwargs):
            self.assertIn(key, redis.store)
            return real_join(*args, **kwargs)

        fake_cache = SimpleNamespace(client=SimpleNamespace(get_client=lambda write: redis))
        with patch("promos.utils.cache", fake_cache), patch(
            "promos.service._join_flash_promo", side_effect=join_and_check_lock
        ):
            join_flash_promo(self.promo.id, self.user.id)

        self.assertNotIn(key, redis.store)
        self.assertEqual(FlashPromoParticipant.objects.count(), 1)

    def test_deactivate_task(self):
        ended = FlashPromo.objects.create(
            name="Yesterday",
            start_date=timezone.now() - timedelta(days=2),
            end_date=timezone.now() - timedelta(days=1),
            max_participants=3,
            prize="Mug",
        )

        self.assertEqual(deactivate_ended_flash_promos(), 1)
        ended.refresh_from_db()
        self.promo.refresh_from_db()
        self.assertFalse(ended.is_active)
        self.assertTrue(self.promo.is_active)


class FlashPromoApiTests(APITestCase):
    def setUp(self):
        now = timezone.now()
        self.promo = FlashPromo.objects.create(
            name="Happy hour",
            start_date=now - timedelta(hours=1),
            end_date=now + timedelta(hours=1),
            max_participants=2,
            prize="Double points",
            multiplier=2,
        )
        self.user = make_user()
        self.client.force_authenticate(self.user)

    def test_join_and_leave(self):
        url = f"/api/flash-promos/{self.promo.id}"
        response = self.client.post(f"{url}/join", {"userId": self.user.id}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["currentParticipants"], 1)
        self.assertEqual(response.data["participants"][0]["userId"], self.user.id)

        response = self.client.post(f"{url}/join", {"userId": self.user.id}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "You have already joined this flash promo")

        response = self.client.post(f"{url}/leave", {"userId": self.user.id}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["currentParticipants"], 0)

    def test_join_requires_user_id(self):
        response = self.client.post(f"/api/flash-promos/{self.promo.id}/join", {}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "User ID is required")

    def test_join_missing_promo(self):
        response = self.client.post("/api/flash-promos/9999/join", {"userId": self.user.id}, format="json")
        self.assertEqual(response.status_code, 404)

    def test_list_active_only(self):
        FlashPromo.objects.create(
            name="Old",
            start_date=timezone.now() - timedelta(days=3),
            end_date=timezone.now() - timedelta(days=2),
            max_participants=2,
            prize="Sticker",
        )
        response = self.client.get("/api/flash-promos?active=true")
        self.assertEqual([p["name"] for p in response.data], ["Happy hour"])

    def test_admin_create_and_status(self):
        admin = User.objects.create_superuser(email="admin@example.com", password="Str0ng-pass!")
        self.client.force_authenticate(admin)
        start = timezone.now()
        response = self.client.post(
            "/api/flash-promos",
            {
                "name": "Weekend",
                "startDate": start.isoformat(),
                "endDate": (start + timedelta(days=2)).isoformat(),
                "prize": "Tote bag",
            },
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["maxParticipants"], 10)

        response = self.client.patch(
            f"/api/flash-promos/{response.data['id']}/status", {"isActive": False}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.data["isActive"])
