from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()

class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "role", "name"]

    def create(self, validated_data):
        # pas de mot de passe: les comptes ne servent qu'aux références
        return User.objects.create_user(**validated_data)

class StudentSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "username", "name"]
