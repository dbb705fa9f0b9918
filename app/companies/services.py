"""
Company and application services.

Services:
    ApplicationService: Submitting applications and changing their status
    CompanyService: HR membership and company deletion

Side effects:
    Realtime broadcasts and notifications happen after the write has
    committed and are best-effort. Both collaborators are passed in by the
    caller (views get them from config.wiring); when one is None the
    corresponding side effect is skipped.

Realtime events:
    new_application            -> company_{id}
    application_status_update  -> user_{applicant_id}

Notifications:
    application_confirmation   -> applicant
    new_application            -> job creator and up to 5 other HR members
    application_status         -> applicant
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from django.db import IntegrityError
from django.utils import timezone

from authentication.models import User
from chat.constants import REALTIME_EVENTS
from companies.constants import NOTIFICATION_LIMITS
from companies.models import Application, ApplicationStatus, Company, Job
from core.services import BaseService, ErrorKind, ServiceResult
from notifications.constants import NOTIFICATION_KINDS

if TYPE_CHECKING:
    from chat.realtime import RealtimeChannel
    from notifications.services import NotificationDispatcher


class ApplicationService(BaseService):
    """Application lifecycle."""

    @classmethod
    def submit_application(
        cls,
        applicant: User,
        job_id: int,
        notes: str = "",
        *,
        realtime: RealtimeChannel | None = None,
        notifier: NotificationDispatcher | None = None,
    ) -> ServiceResult[Application]:
        """
        Apply to a job.

        Error codes:
            JOB_NOT_FOUND (NOT_FOUND), JOB_CLOSED (BAD_REQUEST),
            ALREADY_APPLIED (BAD_REQUEST)
        """
        job = Job.objects.select_related("company", "added_by").filter(pk=job_id).first()
        if job is None:
            return ServiceResult.failure(
                "Job not found",
                error_code="JOB_NOT_FOUND",
                error_kind=ErrorKind.NOT_FOUND,
            )

        if job.closed:
            return ServiceResult.failure(
                "This job is no longer accepting applications",
                error_code="JOB_CLOSED",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        if Application.objects.filter(job=job, applicant=applicant).exists():
            return ServiceResult.failure(
                "You have already applied for this job",
                error_code="ALREADY_APPLIED",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        try:
            with cls.atomic():
                application = Application.objects.create(
                    job=job,
                    applicant=applicant,
                    notes=notes or "",
                )
        except IntegrityError:
            return ServiceResult.failure(
                "You have already applied for this job",
                error_code="ALREADY_APPLIED",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        cls.get_logger().info(
            f"User {applicant.pk} applied to job {job.pk} (application {application.pk})"
        )

        if realtime is not None:
            realtime.to_company(
                job.company_id,
                REALTIME_EVENTS.NEW_APPLICATION,
                {
                    "application_id": application.pk,
                    "job_title": job.title,
                    "applicant": {
                        "name": applicant.full_name,
                        "email": applicant.email,
                    },
                    "timestamp": application.created_at.isoformat(),
                },
            )

        if notifier is not None:
            context = cls._notification_context(application)
            notifier.notify(
                NOTIFICATION_KINDS.APPLICATION_CONFIRMATION,
                {**context, "recipients": [applicant.email]},
            )
            notifier.notify(
                NOTIFICATION_KINDS.NEW_APPLICATION,
                {**context, "recipients": cls._hr_recipients(job)},
            )

        return ServiceResult.success(application)

    @classmethod
    def update_status(
        cls,
        actor: User,
        application_id: int,
        status: str,
        notes: str | None = None,
        *,
        realtime: RealtimeChannel | None = None,
        notifier: NotificationDispatcher | None = None,
    ) -> ServiceResult[Application]:
        """
        Change an application's review status.

        Allowed for the job's creator, anyone managing the job's company,
        or an elevated user.

        Error codes:
            APPLICATION_NOT_FOUND (NOT_FOUND), NOT_ALLOWED (FORBIDDEN),
            INVALID_STATUS (BAD_REQUEST)
        """
        application = (
            Application.objects.select_related("job", "job__company", "applicant")
            .filter(pk=application_id)
            .first()
        )
        if application is None:
            return ServiceResult.failure(
                "Application not found",
                error_code="APPLICATION_NOT_FOUND",
                error_kind=ErrorKind.NOT_FOUND,
            )

        job = application.job
        if not cls.can_review(actor, job):
            return ServiceResult.failure(
                "You are not allowed to update this application",
                error_code="NOT_ALLOWED",
                error_kind=ErrorKind.FORBIDDEN,
            )

        if status not in ApplicationStatus.values:
            return ServiceResult.failure(
                f"Invalid status. Must be one of: {', '.join(ApplicationStatus.values)}",
                error_code="INVALID_STATUS",
                error_kind=ErrorKind.BAD_REQUEST,
            )

        application.status = status
        application.reviewed_by = actor
        application.reviewed_at = timezone.now()
        update_fields = ["status", "reviewed_by", "reviewed_at", "updated_at"]
        if notes is not None:
            application.notes = notes
            update_fields.append("notes")
        application.save(update_fields=update_fields)

        cls.get_logger().info(
            f"Application {application.pk} set to {status!r} by user {actor.pk}"
        )

        if realtime is not None:
            realtime.to_user(
                application.applicant_id,
                REALTIME_EVENTS.APPLICATION_STATUS_UPDATE,
                {
                    "application_id": application.pk,
                    "job_title": job.title,
                    "status": status,
                    "company": job.company.name,
                    "timestamp": application.reviewed_at.isoformat(),
                },
            )

        if notifier is not None:
            notifier.notify(
                NOTIFICATION_KINDS.APPLICATION_STATUS,
                {
                    **cls._notification_context(application),
                    "recipients": [application.applicant.email],
                },
            )

        return ServiceResult.success(application)

    @staticmethod
    def can_review(actor: User, job: Job) -> bool:
        if actor.is_elevated:
            return True
        if job.added_by_id is not None and actor.pk == job.added_by_id:
            return True
        return job.company.is_managed_by(actor)

    @staticmethod
    def _notification_context(application: Application) -> dict[str, Any]:
        job = application.job
        return {
            "application_id": application.pk,
            "job_title": job.title,
            "company_name": job.company.name,
            "applicant_name": application.applicant.full_name,
            "applicant_email": application.applicant.email,
            "status": application.status,
        }

    @staticmethod
    def _hr_recipients(job: Job) -> list[str]:
        """The job creator first, then up to MAX_HR_RECIPIENTS other HR members."""
        recipients = []
        if job.added_by is not None:
            recipients.append(job.added_by.email)

        others = (
            job.company.hr_members.exclude(pk=job.added_by_id)
            .order_by("pk")
            .values_list("email", flat=True)[: NOTIFICATION_LIMITS.MAX_HR_RECIPIENTS]
        )
        recipients.extend(email for email in others if email not in recipients)
        return recipients


class CompanyService(BaseService):
    """HR membership and company removal."""

    @classmethod
    def _load_managed_company(
        cls, actor: User, company_id: int
    ) -> ServiceResult[Company]:
        company = Company.objects.filter(pk=company_id).first()
        if company is None:
            return ServiceResult.failure(
                "Company not found",
                error_code="COMPANY_NOT_FOUND",
                error_kind=ErrorKind.NOT_FOUND,
            )
        if actor.pk != company.created_by_id and not actor.is_elevated:
            return ServiceResult.failure(
                "Only the company owner can do this",
                error_code="NOT_ALLOWED",
                error_kind=ErrorKind.FORBIDDEN,
            )
        return ServiceResult.success(company)

    @classmethod
    def add_hr(cls, actor: User, company_id: int, user_id: int) -> ServiceResult[Company]:
        """
        Add a user to a company's HR members. Adding an existing member is a no-op.

        Error codes:
            COMPANY_NOT_FOUND, NOT_ALLOWED, USER_NOT_FOUND
        """
        result = cls._load_managed_company(actor, company_id)
        if not result:
            return result
        company = result.data

        user = User.objects.filter(pk=user_id).first()
        if user is None:
            return ServiceResult.failure(
                "User not found",
                error_code="USER_NOT_FOUND",
                error_kind=ErrorKind.NOT_FOUND,
            )

        company.hr_members.add(user)
        cls.get_logger().info(f"User {user.pk} added to HR of company {company.pk}")
        return ServiceResult.success(company)

    @classmethod
    def remove_hr(cls, actor: User, company_id: int, user_id: int) -> ServiceResult[Company]:
        """
        Remove a user from a company's HR members.

        The user loses HR capability on their next chat action unless
        they still manage another company.

        Error codes:
            COMPANY_NOT_FOUND, NOT_ALLOWED, NOT_HR_MEMBER
        """
        result = cls._load_managed_company(actor, company_id)
        if not result:
            return result
        company = result.data

        if not company.hr_members.filter(pk=user_id).exists():
            return ServiceResult.failure(
                "User is not an HR member of this company",
                error_code="NOT_HR_MEMBER",
                error_kind=ErrorKind.NOT_FOUND,
            )

        company.hr_members.remove(user_id)
        cls.get_logger().info(f"User {user_id} removed from HR of company {company.pk}")
        return ServiceResult.success(company)

    @classmethod
    def delete_company(cls, actor: User, company_id: int) -> ServiceResult[None]:
        """
        Delete a company with its jobs and applications.

        Error codes:
            COMPANY_NOT_FOUND, NOT_ALLOWED
        """
        result = cls._load_managed_company(actor, company_id)
        if not result:
            return result

        cls.purge_company(result.data)
        cls.get_logger().info(f"Company {company_id} deleted by user {actor.pk}")
        return ServiceResult.success(None)

    @classmethod
    def purge_company(cls, company: Company) -> None:
        """
        Remove a company and everything under it in one transaction.

        Order: applications, jobs, HR links, the company.
        """
        with cls.atomic():
            Application.objects.filter(job__company=company).delete()
            Job.objects.filter(company=company).delete()
            company.hr_members.clear()
            company.delete()
