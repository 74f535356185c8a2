from datetime import datetime, timezone as dt_timezone

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase, override_settings
from rest_framework.test import APITestCase

from rewards.models import Reward, RewardClaim
from rewards.service import create_reward, redeem_reward


User = get_user_model()

PASSWORD = "Str0ng-pass!"


@override_settings(TIME_ZONE="UTC")
class RedeemRewardServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="user@example.com", password=PASSWORD, name="User", points=100)
        self.reward = Reward.objects.create(
            name="Coffee voucher",
            points_required=100,
            stock_available=1,
            type=Reward.VOUCHERS,
        )

    def test_exact_balance_and_last_unit(self):
        now = datetime(2024, 3, 7, 9, 30, tzinfo=dt_timezone.utc)
        result = redeem_reward(self.user.id, self.reward.id, now=now)

        self.user.refresh_from_db()
        self.reward.refresh_from_db()
        self.assertEqual(self.user.points, 0)
        self.assertEqual(self.reward.stock_available, 0)
        self.assertEqual(result["redemption_date"], "3/7/2024")
        self.assertEqual(self.user.reward_claims.count(), 1)
        self.assertEqual(self.reward.claims.get().user, self.user)

    def test_insufficient_points_changes_nothing(self):
        self.user.points = 99
        self.user.save()

        with self.assertRaises(ValidationError) as ctx:
            redeem_reward(self.user.id, self.reward.id)

        self.assertEqual(ctx.exception.code, "insufficient_points")
        self.user.refresh_from_db()
        self.reward.refresh_from_db()
        self.assertEqual(self.user.points, 99)
        self.assertEqual(self.reward.stock_available, 1)
        self.assertFalse(RewardClaim.objects.exists())

    def test_out_of_stock(self):
        self.reward.stock_available = 0
        self.reward.save()

        with self.assertRaises(ValidationError) as ctx:
            redeem_reward(self.user.id, self.reward.id)

        self.assertEqual(ctx.exception.code, "out_of_stock")
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 100)

    def test_claim_only_once(self):
        self.user.points = 500
        self.user.save()
        self.reward.stock_available = 5
        self.reward.save()
        redeem_reward(self.user.id, self.reward.id)

        with self.assertRaises(ValidationError) as ctx:
            redeem_reward(self.user.id, self.reward.id)

        self.assertEqual(ctx.exception.code, "already_claimed")
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 400)
        self.assertEqual(RewardClaim.objects.count(), 1)

    def test_duplicate_reward_name(self):
        with self.assertRaises(ValidationError) as ctx:
            create_reward(name="Coffee voucher", points_required=10, reward_type=Reward.VOUCHERS)
        self.assertEqual(ctx.exception.code, "duplicate_name")


class RewardApiTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email="admin@example.com", password=PASSWORD)
        self.user = User.objects.create_user(email="user@example.com", password=PASSWORD, name="User", points=100)
        self.reward = Reward.objects.create(
            name="Tote bag",
            points_required=100,
            stock_available=1,
            type=Reward.PRODUCTS,
        )

    def test_redeem(self):
        self.client.force_authenticate(self.user)
        response = self.client.post(
            "/api/auth/redeem-reward",
            {"userId": self.user.id, "rewardsid": self.reward.id},
            format="json",
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["message"], "Reward redeemed successfully!")
        self.assertEqual(response.data["rewardsname"], "Tote bag")

        me = self.client.get("/api/auth/me")
        self.assertEqual(me.data["rewardsclaimed"], [{"rewardsid": self.reward.id, "rewardsname": "Tote bag"}])

        rewards = self.client.get("/api/auth/rewards")
        self.assertEqual(rewards.data[0]["stockAvailable"], 0)
        self.assertEqual(rewards.data[0]["UsersClaimed"][0]["userId"], self.user.id)

    def test_redeem_errors(self):
        self.client.force_authenticate(self.user)
        response = self.client.post("/api/auth/redeem-reward", {"userId": self.user.id}, format="json")
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            "/api/auth/redeem-reward", {"userId": self.user.id, "rewardsid": 9999}, format="json"
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["message"], "Reward not found")

        self.user.points = 10
        self.user.save()
        response = self.client.post(
            "/api/auth/redeem-reward",
            {"userId": self.user.id, "rewardsid": self.reward.id},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["message"], "Not enough points to redeem this reward.")

    def test_admin_create_and_delete(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            "/api/auth/create-reward",
            {"name": "Sticker pack", "pointsRequired": 20, "stockAvailable": 10, "type": "Products"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["message"], "Reward created successfully!")

        response = self.client.post(
            "/api/auth/create-reward",
            {"name": "Sticker pack", "pointsRequired": 20, "type": "Products"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

        reward_id = Reward.objects.get(name="Sticker pack").id
        response = self.client.delete(f"/api/auth/delete-reward/{reward_id}")
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Reward.objects.filter(pk=reward_id).exists())

        response = self.client.delete(f"/api/auth/delete-reward/{reward_id}")
        self.assertEqual(response.status_code, 404)

    def test_create_requires_admin(self):
        self.client.force_authenticate(self.user)
        response = self.client.post(
            "/api/auth/create-reward",
            {"name": "Sticker pack", "pointsRequired": 20, "type": "Products"},
            format="json",
        )
        self.assertEqual(response.status_code, 403)
