from django.db import models


class District(models.TextChoices):
    DISTRICT_1 = "District 1", "Al-Zahra (District 1)"
    DISTRICT_2 = "District 2", "Al-Mogambo (District 2)"
    DISTRICT_3 = "District 3", "Al-Furqan (District 3)"


class Category(models.TextChoices):
    ELECTRICITY = "Electricity", "Electricity"
    WATER = "Water", "Water"
    ROADS = "Roads", "Roads"
    SANITATION = "Sanitation", "Sanitation"
    SECURITY = "Security", "Security"
    OTHER = "Other", "Other"


class Urgency(models.TextChoices):
    NORMAL = "NORMAL", "Normal"
    URGENT = "URGENT", "Urgent"
    CRITICAL = "CRITICAL", "Critical"


class Status(models.TextChoices):
    UNREAD = "UNREAD", "Unread"
    IN_PROGRESS = "IN_PROGRESS", "In Progress"
    COMPLETED = "COMPLETED", "Completed"
    REJECTED = "REJECTED", "Rejected"
    CLOSED = "CLOSED", "Closed"


class Role(models.TextChoices):
    MUKTAR = "MUKTAR", "Muktar"
    ADMIN = "ADMIN", "Admin"
    MANAGER = "MANAGER", "Manager"


TERMINAL_STATUSES = frozenset({Status.COMPLETED, Status.REJECTED, Status.CLOSED})
