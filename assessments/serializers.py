import logging
from decimal import Decimal, InvalidOperation

from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from .models import Assessment, Mark

logger = logging.getLogger(__name__)

User = get_user_model()


# -------------------------
#  Model Serializers
# -------------------------

class AssessmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Assessment
        fields = ["id", "course_offering", "name", "max_marks", "weight_percent"]

    def validate_max_marks(self, value):
        # max_marks = 0 rendrait la contribution indéfinie
        if value is not None and value <= 0:
            raise serializers.ValidationError("max_marks must be greater than 0.")
        return value


class MarkSerializer(serializers.ModelSerializer):
    student = serializers.PrimaryKeyRelatedField(queryset=User.objects.filter(role=User.Role.STUDENT))

    class Meta:
        model = Mark
        fields = ["id", "assessment", "student", "marks_obtained", "recorded_at"]
        read_only_fields = ["recorded_at"]


# -------------------------
#  BULK SERIALIZERS
# -------------------------

class BulkMarksUpsertSerializer(serializers.Serializer):
    """
    Upsert des notes pour UNE épreuve.

    Body:
    {
      "assessment": 10,
      "entries": [
        { "student": 4, "marks_obtained": 17.5 },
        { "student": 5, "marks_obtained": 12 }
      ]
    }
    """
    assessment = serializers.PrimaryKeyRelatedField(queryset=Assessment.objects.all())
    entries = serializers.ListField(child=serializers.DictField(), allow_empty=True)

    def validate(self, attrs):
        for e in attrs.get("entries", []):
            if "student" not in e:
                raise serializers.ValidationError("Each entry must have 'student'.")
            if "marks_obtained" not in e:
                raise serializers.ValidationError("Each entry must have 'marks_obtained'.")
            # cast Decimal au moment du create() pour différencier les raisons de skip
        return attrs

    @transaction.atomic
    def create(self, validated):
        assessment = validated["assessment"]

        existing = {m.student_id: m for m in Mark.objects.filter(assessment=assessment)}
        student_ids = set(
            User.objects.filter(role=User.Role.STUDENT).values_list("id", flat=True)
        )

        # mêmes bornes que le champ du modèle (max_digits / decimal_places)
        marks_field = Mark._meta.get_field("marks_obtained")

        results = {"created": [], "updated": [], "skipped": []}

        for e in validated.get("entries", []):
            student_id = e.get("student")
            raw_val = e.get("marks_obtained")

            try:
                student_id = int(student_id)
            except (TypeError, ValueError):
                results["skipped"].append({"student": student_id, "reason": "Student not found"})
                continue

            try:
                val = Decimal(str(raw_val))
            except (InvalidOperation, TypeError):
                results["skipped"].append({"student": student_id, "reason": "Invalid value"})
                continue
            if not val.is_finite():
                results["skipped"].append({"student": student_id, "reason": "Invalid value"})
                continue
            try:
                val = marks_field.clean(val, None)
            except DjangoValidationError:
                results["skipped"].append({"student": student_id, "reason": "Out of range"})
                continue

            if student_id not in student_ids:
                results["skipped"].append({"student": student_id, "reason": "Student not found"})
                continue

            if student_id in existing:
                m = existing[student_id]
                if m.marks_obtained != val:
                    m.marks_obtained = val
                    m.save(update_fields=["marks_obtained", "recorded_at"])
                results["updated"].append(m.id)
            else:
                m = Mark.objects.create(assessment=assessment, student_id=student_id, marks_obtained=val)
                existing[student_id] = m
                results["created"].append(m.id)

        logger.info(
            f"Bulk marks for assessment {assessment.id}: "
            f"{len(results['created'])} created, {len(results['updated'])} updated, "
            f"{len(results['skipped'])} skipped"
        )
        return results
