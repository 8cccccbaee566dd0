from rest_framework import viewsets, filters
from rest_framework.response import Response
from rest_framework.views import APIView
from django.contrib.auth import get_user_model
from .serializers import UserSerializer, StudentSerializer

User = get_user_model()

class UserViewSet(viewsets.ModelViewSet):
    queryset = User.objects.all()
    serializer_class = UserSerializer
    filterset_fields = ["role"]

    def get_serializer(self, *args, **kwargs):
        # PUT garde les champs non fournis (comme un COALESCE)
        if self.action == "update":
            kwargs["partial"] = True
        return super().get_serializer(*args, **kwargs)

class StudentViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = User.objects.filter(role=User.Role.STUDENT)
    serializer_class = StudentSerializer
    filter_backends = [filters.SearchFilter]
    search_fields = ["username", "name"]

class HealthView(APIView):
    def get(self, request):
        return Response({"status":"ok"})
