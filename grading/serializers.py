from rest_framework import serializers
from .models import GradeBand

class GradeBandSerializer(serializers.ModelSerializer):
    class Meta:
        model = GradeBand
        fields = ["id", "min_percent", "max_percent", "grade_point", "grade_letter"]
