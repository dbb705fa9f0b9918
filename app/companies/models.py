"""
Company, job and application models.

Models:
    Company: An employer, owned by its creator, with a set of HR members
    Job: A posting under a company
    Application: A user's application to a job, one per (job, applicant)

HR capability:
    A user is HR-capable when they created at least one company or appear
    in a company's hr_members. Callers query this through
    Company.objects.managed_by(user) on every check.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.conf import settings
from django.db import models
from django.db.models import Q

from core.models import BaseModel

if TYPE_CHECKING:
    from authentication.models import User


class CompanyQuerySet(models.QuerySet):
    def managed_by(self, user: User) -> CompanyQuerySet:
        """Companies the user created or is an HR member of."""
        return self.filter(Q(created_by=user) | Q(hr_members=user)).distinct()


class Company(BaseModel):
    """
    An employer account.

    Fields:
        name: Display name
        email: Contact address
        created_by: Owner; the only non-elevated user who can manage HR
        hr_members: Users acting for the company
    """

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_companies",
    )
    hr_members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name="hr_companies",
    )

    objects = CompanyQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "companies"

    def __str__(self) -> str:
        return self.name

    def is_managed_by(self, user: User) -> bool:
        if user.pk == self.created_by_id:
            return True
        return self.hr_members.filter(pk=user.pk).exists()


class Job(BaseModel):
    company = models.ForeignKey(
        Company,
        on_delete=models.CASCADE,
        related_name="jobs",
    )
    title = models.CharField(max_length=200)
    added_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="posted_jobs",
        help_text="HR member or owner who posted the job",
    )
    closed = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.title} ({self.company_id})"


class ApplicationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    VIEWED = "viewed", "Viewed"
    IN_CONSIDERATION = "in consideration", "In consideration"
    REJECTED = "rejected", "Rejected"


class Application(BaseModel):
    """
    A user's application to a job.

    Fields:
        status: Review state, pending until a reviewer changes it
        reviewed_by: Last user to change the status
        reviewed_at: When the status last changed
    """

    job = models.ForeignKey(
        Job,
        on_delete=models.CASCADE,
        related_name="applications",
    )
    applicant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="applications",
    )
    status = models.CharField(
        max_length=20,
        choices=ApplicationStatus.choices,
        default=ApplicationStatus.PENDING,
    )
    notes = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_applications",
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["job", "applicant"],
                name="unique_application_per_job",
            ),
        ]

    def __str__(self) -> str:
        return f"Application(job={self.job_id}, applicant={self.applicant_id})"
