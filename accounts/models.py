import uuid
from django.db import models
from django.utils import timezone
from django.contrib.auth.models import AbstractUser


class Role(models.TextChoices):
    ADMIN      = "ADMIN",      "Admin"
    SUPERVISOR = "SUPERVISOR", "Supervisor"
    EMPLOYEE   = "EMPLOYEE",   "Employee"

class Gender(models.TextChoices):
    MALE   = "MALE",   "Male"
    FEMALE = "FEMALE", "Female"
    OTHER  = "OTHER",  "Other"


class Division(models.Model):
    name       = models.CharField(max_length=120, unique=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return self.name


class User(AbstractUser):
    user_id    = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name       = models.CharField(max_length=120)
    email      = models.EmailField(unique=True)
    gender     = models.CharField(max_length=6, choices=Gender.choices, null=True, blank=True)
    role       = models.CharField(max_length=10, choices=Role.choices, default=Role.EMPLOYEE)
    division   = models.ForeignKey(Division, on_delete=models.SET_NULL, null=True, blank=True, related_name="users")
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name or self.email or self.username
