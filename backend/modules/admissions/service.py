"""
Admissions service implementation.
"""

import asyncio
import logging
from typing import Optional

from shared.models import AdmissionStatus

from .interfaces import IAdmissionsService
from .models import Application, ApplicationListResponse
from .exceptions import StudentNotFoundError
from .repository import AdmissionsRepository

logger = logging.getLogger(__name__)


class AdmissionsService(IAdmissionsService):
    """
    Admissions review for admin and teacher users.

    Status values are always written in canonical form; legacy spellings
    found on read are normalized by the models. Repository calls block, so
    they run in a worker thread.
    """

    def __init__(self, repository: AdmissionsRepository):
        self._repository = repository

    async def list_applications(self) -> ApplicationListResponse:
        items = await asyncio.to_thread(self._repository.list_applications)
        return ApplicationListResponse(items=items, total=len(items))

    async def list_students(
        self,
        search: Optional[str] = None,
        status: Optional[AdmissionStatus] = None,
    ) -> ApplicationListResponse:
        applications = await asyncio.to_thread(self._repository.list_applications)
        items = [
            item
            for item in applications
            if (status is None or item.admission_status is status)
            and item.matches(search or "")
        ]
        return ApplicationListResponse(items=items, total=len(items))

    async def set_status(self, student_id: str, status: AdmissionStatus) -> Application:
        if not await asyncio.to_thread(self._repository.update_status, student_id, status):
            raise StudentNotFoundError(student_id)

        logger.info(f"Student {student_id} admission status set to {status.value}")
        application = await asyncio.to_thread(self._repository.get_application, student_id)
        if application is None:
            raise StudentNotFoundError(student_id)
        return application

    async def approve(self, student_id: str) -> Application:
        return await self.set_status(student_id, AdmissionStatus.ADMITTED)

    async def reject(self, student_id: str) -> Application:
        return await self.set_status(student_id, AdmissionStatus.REJECTED)
