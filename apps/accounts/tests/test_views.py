import json

import pytest
from django.contrib.auth.models import User
from django.urls import reverse

from apps.accounts.tokens import generate_token, verify_token


def post_json(client, url, data):
    return client.post(url, data=json.dumps(data), content_type='application/json')


@pytest.mark.django_db
class TestRegisterView:

    def test_register_success_returns_token(self, client):
        """회원가입 성공 시 토큰과 사용자 정보 반환 (자동 로그인)"""
        response = post_json(client, reverse('accounts:register'), {
            'username': 'newbie',
            'email': 'newbie@example.com',
            'password': 'secret1',
        })

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['message'] == 'สมัครสมาชิกสำเร็จ'
        assert body['user']['username'] == 'newbie'
        assert body['user']['role'] == 'user'
        assert verify_token(body['token'])['username'] == 'newbie'

        user = User.objects.get(username='newbie')
        assert user.profile.status == 'active'
        assert user.last_login is not None
        assert user.check_password('secret1')

    def test_register_missing_fields(self, client):
        response = post_json(client, reverse('accounts:register'), {'username': 'newbie'})

        assert response.status_code == 400
        assert response.json() == {'success': False, 'error': 'กรุณากรอกข้อมูลให้ครบ'}

    @pytest.mark.parametrize('payload, message', [
        ({'username': 'ab', 'email': 'a@b.co', 'password': 'secret1'}, 'Username ต้องมีอย่างน้อย 3 ตัวอักษร'),
        ({'username': 'abc', 'email': 'a@b.co', 'password': '12345'}, 'รหัสผ่านต้องมีอย่างน้อย 6 ตัวอักษร'),
        ({'username': 'abc', 'email': 'not-an-email', 'password': 'secret1'}, 'รูปแบบ Email ไม่ถูกต้อง'),
    ])
    def test_register_validation_messages(self, client, payload, message):
        response = post_json(client, reverse('accounts:register'), payload)

        assert response.status_code == 400
        assert response.json()['error'] == message

    def test_register_duplicate_username(self, client, test_user):
        response = post_json(client, reverse('accounts:register'), {
            'username': 'tester',
            'email': 'fresh@example.com',
            'password': 'secret1',
        })

        assert response.status_code == 400
        assert response.json()['error'] == 'Username นี้ถูกใช้งานแล้ว'

    def test_register_duplicate_email(self, client, test_user):
        response = post_json(client, reverse('accounts:register'), {
            'username': 'fresh',
            'email': 'tester@example.com',
            'password': 'secret1',
        })

        assert response.status_code == 400
        assert response.json()['error'] == 'Email นี้ถูกใช้งานแล้ว'

    def test_register_invalid_json(self, client):
        response = client.post(reverse('accounts:register'), data='{oops', content_type='application/json')

        assert response.status_code == 400
        assert response.json()['success'] is False

    def test_register_rejects_get(self, client):
        response = client.get(reverse('accounts:register'))
        assert response.status_code == 405


@pytest.mark.django_db
class TestLoginView:

    def test_login_with_username(self, client, test_user):
        response = post_json(client, reverse('accounts:login'), {'username': 'tester', 'password': 'pass1234'})

        assert response.status_code == 200
        body = response.json()
        assert body['user'] == {
            'id': test_user.id,
            'username': 'tester',
            'email': 'tester@example.com',
            'role': 'user',
        }
        assert verify_token(body['token'])['id'] == test_user.id

        test_user.refresh_from_db()
        assert test_user.last_login is not None

    def test_login_with_email(self, client, test_user):
        response = post_json(client, reverse('accounts:login'), {
            'username': 'tester@example.com',
            'password': 'pass1234',
        })

        assert response.status_code == 200
        assert response.json()['user']['username'] == 'tester'

    def test_login_missing_fields(self, client):
        response = post_json(client, reverse('accounts:login'), {'username': 'tester'})

        assert response.status_code == 400
        assert response.json()['error'] == 'กรุณากรอกข้อมูลให้ครบ'

    def test_login_unknown_user(self, client, db):
        response = post_json(client, reverse('accounts:login'), {'username': 'ghost', 'password': 'pass1234'})

        assert response.status_code == 401
        assert response.json()['error'] == 'ไม่พบผู้ใช้งาน'

    def test_login_wrong_password(self, client, test_user):
        response = post_json(client, reverse('accounts:login'), {'username': 'tester', 'password': 'wrong'})

        assert response.status_code == 401
        assert response.json()['error'] == 'รหัสผ่านไม่ถูกต้อง'

    def test_login_banned_user(self, client, test_user):
        """정지 계정은 비밀번호가 맞아도 로그인 불가"""
        test_user.profile.status = 'banned'
        test_user.profile.save()

        response = post_json(client, reverse('accounts:login'), {'username': 'tester', 'password': 'pass1234'})

        assert response.status_code == 401
        assert response.json()['error'] == 'บัญชีถูกระงับการใช้งาน'


@pytest.mark.django_db
class TestMeView:

    def test_me_returns_current_user(self, client, test_user, auth_headers):
        response = client.get(reverse('accounts:me'), **auth_headers)

        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'user': {'id': test_user.id, 'username': 'tester', 'email': 'tester@example.com', 'role': 'user'},
        }

    def test_me_without_token(self, client, db):
        response = client.get(reverse('accounts:me'))

        assert response.status_code == 401
        assert response.json()['error'] == 'ไม่พบ Token'

    def test_me_with_invalid_token(self, client, db):
        response = client.get(reverse('accounts:me'), HTTP_AUTHORIZATION='Bearer not-a-token')

        assert response.status_code == 401
        assert response.json()['error'] == 'Token ไม่ถูกต้องหรือหมดอายุ'

    def test_me_deleted_user(self, client, test_user):
        token = generate_token(test_user)
        test_user.delete()

        response = client.get(reverse('accounts:me'), HTTP_AUTHORIZATION=f'Bearer {token}')

        assert response.status_code == 404

    def test_me_suspended_user(self, client, test_user, auth_headers):
        """토큰 발급 후 정지된 계정은 403"""
        test_user.profile.status = 'inactive'
        test_user.profile.save()

        response = client.get(reverse('accounts:me'), **auth_headers)

        assert response.status_code == 403
        assert response.json()['error'] == 'บัญชีถูกระงับการใช้งาน'
