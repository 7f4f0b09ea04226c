"""
Resume Service Interfaces
"""
from abc import ABC, abstractmethod

from internship_portal.domain.entities import Identity


class IResumeRenderer(ABC):
    """Turns a fully-populated student record into a document"""

    @abstractmethod
    def render(self, student: Identity) -> bytes:
        """
        Render the student's resume

        Raises:
            ResumeRenderingException: document could not be produced
        """
        pass
