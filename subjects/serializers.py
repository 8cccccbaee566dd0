from rest_framework import serializers
from django.contrib.auth import get_user_model
from .models import Subject, CourseOffering

User = get_user_model()

class SubjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Subject
        fields = ["id","code","title","credits"]

class CourseOfferingSerializer(serializers.ModelSerializer):
    teacher = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(role=User.Role.TEACHER), required=False, allow_null=True
    )

    class Meta:
        model = CourseOffering
        fields = ["id","subject","semester","teacher"]

# Détail pour UI (avec infos matière, semestre et enseignant)
class CourseOfferingDetailSerializer(serializers.ModelSerializer):
    code = serializers.CharField(source="subject.code", read_only=True)
    title = serializers.CharField(source="subject.title", read_only=True)
    credits = serializers.DecimalField(source="subject.credits", max_digits=5, decimal_places=2, read_only=True)
    semester_id = serializers.IntegerField(read_only=True)
    semester = serializers.CharField(source="semester.name", read_only=True)
    teacher_id = serializers.IntegerField(read_only=True, allow_null=True)
    teacher_name = serializers.CharField(source="teacher.name", read_only=True, allow_null=True)

    class Meta:
        model = CourseOffering
        fields = ["id","code","title","credits","semester_id","semester","teacher_id","teacher_name"]
