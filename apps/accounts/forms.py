from django import forms
from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db.models import Q
import re

from .models import Profile

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

REQUIRED_MESSAGE = 'กรุณากรอกข้อมูลให้ครบ'


class RegisterForm(forms.Form):
    """
    회원가입 폼 (API)

    검증 순서: 필수값 → 아이디 길이 → 비밀번호 길이 → 이메일 형식 → 중복
    클라이언트에는 첫 번째 에러 하나만 내려주므로 순서가 곧 우선순위입니다.
    """
    username = forms.CharField(required=False, max_length=150, strip=True)
    email = forms.CharField(required=False, max_length=254, strip=True)
    password = forms.CharField(required=False, strip=False)

    def clean(self):
        cleaned_data = super().clean()
        username = cleaned_data.get('username')
        email = cleaned_data.get('email')
        password = cleaned_data.get('password')

        if not username or not email or not password:
            raise ValidationError(REQUIRED_MESSAGE, code='required')

        if len(username) < 3:
            raise ValidationError('Username ต้องมีอย่างน้อย 3 ตัวอักษร', code='username_length')

        if len(password) < 6:
            raise ValidationError('รหัสผ่านต้องมีอย่างน้อย 6 ตัวอักษร', code='password_length')

        if not EMAIL_PATTERN.match(email):
            raise ValidationError('รูปแบบ Email ไม่ถูกต้อง', code='email_format')

        if User.objects.filter(username=username).exists():
            raise ValidationError('Username นี้ถูกใช้งานแล้ว', code='duplicate_username')

        if User.objects.filter(email=email).exists():
            raise ValidationError('Email นี้ถูกใช้งานแล้ว', code='duplicate_email')

        return cleaned_data

    def save(self):
        """사용자 생성 (Profile 은 signals 에서 자동 생성)"""
        return User.objects.create_user(
            username=self.cleaned_data['username'],
            email=self.cleaned_data['email'],
            password=self.cleaned_data['password'],
        )


class LoginForm(forms.Form):
    """
    로그인 폼 (아이디 또는 이메일)

    - 필수값 누락: 필드 에러
    - 인증 실패(없는 사용자, 정지 계정, 비밀번호 불일치): non-field 에러
    """
    username = forms.CharField(error_messages={'required': REQUIRED_MESSAGE})
    password = forms.CharField(strip=False, error_messages={'required': REQUIRED_MESSAGE})

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_cache = None

    def clean(self):
        cleaned_data = super().clean()
        identifier = cleaned_data.get('username')
        password = cleaned_data.get('password')

        if not identifier or not password:
            return cleaned_data

        user = User.objects.filter(Q(username=identifier) | Q(email=identifier)).first()
        if user is None:
            raise ValidationError('ไม่พบผู้ใช้งาน', code='not_found')

        profile, _ = Profile.objects.get_or_create(user=user)
        if not profile.is_usable:
            raise ValidationError('บัญชีถูกระงับการใช้งาน', code='suspended')

        if not user.check_password(password):
            raise ValidationError('รหัสผ่านไม่ถูกต้อง', code='invalid_password')

        self.user_cache = user
        return cleaned_data

    def has_missing_fields(self):
        return self.has_error('username') or self.has_error('password')

    def get_user(self):
        return self.user_cache
