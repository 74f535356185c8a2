from unittest.mock import patch

from django.core.exceptions import ValidationError
from django.test import TestCase
from rest_framework.test import APITestCase

from utils.events import EventEmitter

from .models import User
from .service import adjust_points, top_retailers
from .utils import generate_tokens_for_user
from .views import LoginView

PASSWORD = 'Str0ng-pass!'


class RecordingEmitter(EventEmitter):
    def __init__(self):
        self.events = []

    def emit(self, event, payload, room=None):
        self.events.append((event, payload, room))


class BrokenEmitter(EventEmitter):
    def emit(self, event, payload, room=None):
        raise ConnectionError('redis down')


class RegisterTests(APITestCase):
    url = '/api/auth/register'

    def test_register_consumer(self):
        response = self.client.post(self.url, {
            'name': 'Jaemin',
            'email': 'Jaemin@Example.com',
            'password': PASSWORD,
            'userType': 'Consumer',
        }, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['message'], 'User Created Successfully')
        user = User.objects.get()
        self.assertEqual(user.email, 'jaemin@example.com')
        self.assertEqual(user.points, 50)
        self.assertEqual(user.redemption_count, 3)
        self.assertTrue(user.check_password(PASSWORD))

    def test_duplicate_email(self):
        User.objects.create_user(email='taken@example.com', password=PASSWORD, name='Taken')
        response = self.client.post(self.url, {
            'name': 'Other',
            'email': 'taken@example.com',
            'password': PASSWORD,
            'userType': 'Consumer',
        }, format='json')
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['message'], 'User with given email already exists')

    def test_retailer_requires_shop_name(self):
        response = self.client.post(self.url, {
            'name': 'Shop owner',
            'email': 'shop@example.com',
            'password': PASSWORD,
            'userType': 'Retailer',
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(User.objects.exists())


class LoginTests(APITestCase):
    url = '/api/auth/login'

    def setUp(self):
        self.user = User.objects.create_user(email='jaemin@example.com', password=PASSWORD, name='Jaemin')

    def test_login_returns_tokens(self):
        response = self.client.post(self.url, {'email': 'jaemin@example.com', 'password': PASSWORD}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertIn('access', response.data['token'])
        self.assertIn('refresh', response.data['token'])
        self.assertEqual(response.data['user']['email'], 'jaemin@example.com')
        self.assertEqual(response.data['user']['rewardsclaimed'], [])

        access = response.data['token']['access']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
        me = self.client.get('/api/auth/me')
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data['id'], self.user.id)

    def test_wrong_password(self):
        response = self.client.post(self.url, {'email': 'jaemin@example.com', 'password': 'nope'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Invalid email or password')

    def test_me_requires_token(self):
        response = self.client.get('/api/auth/me')
        self.assertEqual(response.status_code, 401)

    def test_login_emits_user_activity(self):
        emitter = RecordingEmitter()
        with patch.object(LoginView, 'event_emitter', emitter):
            with self.captureOnCommitCallbacks(execute=True):
                self.client.post(self.url, {'email': 'jaemin@example.com', 'password': PASSWORD}, format='json')
        self.assertEqual(emitter.events[0][0], 'userActivity')
        self.assertEqual(emitter.events[0][1]['user'], 'Jaemin')

    def test_login_succeeds_when_emitter_fails(self):
        with patch.object(LoginView, 'event_emitter', BrokenEmitter()):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(
                    self.url, {'email': 'jaemin@example.com', 'password': PASSWORD}, format='json'
                )
        self.assertEqual(response.status_code, 200)
        self.assertIn('access', response.data['token'])


class RequestLoggingTests(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(email='jaemin@example.com', password=PASSWORD, name='Jaemin')

    def test_end_line_carries_jwt_user(self):
        access = generate_tokens_for_user(self.user)['access']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
        with self.assertLogs('loyalty_backend.middleware', level='INFO') as logs:
            response = self.client.get('/api/auth/me', HTTP_X_REQUEST_ID='trace-42')
        self.assertEqual(response['X-Request-ID'], 'trace-42')
        end_lines = [line for line in logs.output if ' END ' in line]
        self.assertIn(f'user={self.user.id}', end_lines[0])

    def test_malformed_request_id_is_replaced(self):
        supplied = 'x' * 200
        response = self.client.get('/api/users/top-retailers', HTTP_X_REQUEST_ID=supplied)
        self.assertNotEqual(response['X-Request-ID'], supplied)
        self.assertEqual(len(response['X-Request-ID']), 10)

        response = self.client.get('/api/users/top-retailers', HTTP_X_REQUEST_ID='two words')
        self.assertNotEqual(response['X-Request-ID'], 'two words')


class PointsAdjustTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_superuser(email='admin@example.com', password=PASSWORD)
        self.user = User.objects.create_user(email='user@example.com', password=PASSWORD, name='User')
        self.client.force_authenticate(self.admin)

    def test_add_and_deduct(self):
        response = self.client.post('/api/users/points/add', {'userId': self.user.id, 'points': 30}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['newPoints'], 80)

        response = self.client.post('/api/users/points/deduct', {'userId': self.user.id, 'points': 80}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['newPoints'], 0)

    def test_deduct_more_than_balance(self):
        response = self.client.post('/api/users/points/deduct', {'userId': self.user.id, 'points': 51}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['message'], 'Insufficient points')
        self.user.refresh_from_db()
        self.assertEqual(self.user.points, 50)

    def test_non_admin_forbidden(self):
        self.client.force_authenticate(self.user)
        response = self.client.post('/api/users/points/add', {'userId': self.user.id, 'points': 30}, format='json')
        self.assertEqual(response.status_code, 403)

    def test_unknown_user(self):
        response = self.client.post('/api/users/points/add', {'userId': 9999, 'points': 1}, format='json')
        self.assertEqual(response.status_code, 404)


class RetailerQueryTests(TestCase):
    def setUp(self):
        for idx, points in enumerate([10, 300, 120]):
            User.objects.create_user(
                email=f'shop{idx}@example.com',
                password=PASSWORD,
                name=f'Shop {idx}',
                user_type=User.RETAILER,
                shop_name=f'Shop {idx}',
                points=points,
                verified=idx != 0,
            )
        User.objects.create_user(email='consumer@example.com', password=PASSWORD, name='Consumer', points=999)

    def test_top_retailers_ordered_by_points(self):
        self.assertEqual([u.points for u in top_retailers()], [300, 120, 10])
        self.assertEqual(len(top_retailers(limit=2)), 2)

    def test_adjust_points_rejects_negative_balance(self):
        user = User.objects.get(email='shop0@example.com')
        with self.assertRaises(ValidationError) as ctx:
            adjust_points(user.id, -11)
        self.assertEqual(ctx.exception.code, 'insufficient_points')

    def test_verified_retailers_endpoint(self):
        response = self.client.get('/api/promo-codes/retailers')
        self.assertEqual(response.status_code, 200)
        self.assertEqual([r['shopName'] for r in response.data], ['Shop 1', 'Shop 2'])

    def test_top_retailers_endpoint(self):
        response = self.client.get('/api/users/top-retailers')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data[0]['points'], 300)
