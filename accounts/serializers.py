from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from .models import ROLES

User = get_user_model()

SELF_REGISTER_ROLES = [role for role in ROLES if role != 'admin']


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True)
    role = serializers.ChoiceField(choices=SELF_REGISTER_ROLES, default='seeker')

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'password', 'phone', 'location', 'role',
                  'blood_group', 'last_donation_date', 'hospital_name', 'license')

    def validate_password(self, value):
        validate_password(value)
        return value

    def validate_email(self, value):
        email = value.strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError('A user with this email already exists.')
        return email

    def validate(self, data):
        if data.get('role') == 'donor' and not data.get('blood_group'):
            raise serializers.ValidationError({'blood_group': 'Blood group is required for donors.'})
        if data.get('role') == 'hospital' and not data.get('hospital_name'):
            raise serializers.ValidationError({'hospital_name': 'Hospital name is required for hospitals.'})
        return data

    def create(self, validated_data):
        password = validated_data.pop('password')
        # Email doubles as the login username
        user = User(username=validated_data['email'], **validated_data)
        user.set_password(password)
        user.save()
        return user


class ProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ('id', 'username', 'name', 'email', 'phone', 'location', 'role', 'verified',
                  'blood_group', 'last_donation_date', 'total_donations', 'hospital_name', 'license')
        read_only_fields = ('username', 'email', 'role', 'verified', 'total_donations')


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'phone', 'role', 'verified', 'blood_group',
                  'hospital_name', 'date_joined')
        read_only_fields = fields


class RoleUpdateSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=ROLES)
