"""Abstract base class for export serializers."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..models.event import Event
from ..models.reminder import Reminder


class Serializer(ABC):
    """Abstract base class for export serializers."""

    #: Value of the ``--format`` flag selecting this serializer
    format_name: str = ""
    #: Extension used when exporting into an output directory
    file_extension: str = ""

    @abstractmethod
    def serialize(
        self,
        events: Sequence[Event],
        reminders: Sequence[Reminder],
    ) -> str:
        """
        Render events and reminders into a single document.

        Args:
            events: Events in export order
            reminders: Reminders in export order

        Returns:
            The complete document text

        Raises:
            EncodingFailed: If the document cannot be built
        """
