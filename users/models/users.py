from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin, BaseUserManager
from django.db import models


# -----------------------------
# Custom User Manager
# -----------------------------
class UserManager(BaseUserManager):
    def create_user(self, email, full_name, password=None, role=None, **extra_fields):
        if not email:
            raise ValueError("Email is required")
        if not full_name:
            raise ValueError("Full name is required")

        email = self.normalize_email(email).lower()
        user = self.model(
            email=email,
            full_name=full_name,
            role=role or User.Role.USER,
            **extra_fields,
        )
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, full_name, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(email, full_name, password, role=User.Role.ADMIN, **extra_fields)


# -----------------------------
# User Model
# -----------------------------
class User(AbstractBaseUser, PermissionsMixin):
    class Role(models.TextChoices):
        USER = "user", "User"
        ADMIN = "admin", "Admin"

    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=120)
    phone = models.CharField(max_length=15, blank=True, default="")
    # {street, city, state, pincode}
    address = models.JSONField(default=dict, blank=True)
    aadhaar_number = models.CharField(max_length=12, blank=True, default="")
    pan_number = models.CharField(max_length=10, blank=True, default="")
    date_of_birth = models.DateField(blank=True, null=True)
    father_name = models.CharField(max_length=120, blank=True, default="")

    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER, db_index=True)

    is_staff = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.full_name} <{self.email}> ({self.role})"

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN
