"""Import legacy comments use case."""

from ziora.application.usecase.base import WireModel
from ziora.domain.service import LegacyCommentImporter


class ImportLegacyCommentsResponse(WireModel):
    """Import legacy comments response."""

    success: bool = True
    message: str
    imported: int
    documents: int


class ImportLegacyCommentsUseCase:
    """Use case for moving comments embedded in content into the comment store."""

    def __init__(self, importer: LegacyCommentImporter) -> None:
        """Initialize import use case.

        Args:
            importer: Legacy comment importer
        """
        self.importer = importer

    async def execute(self) -> ImportLegacyCommentsResponse:
        """Execute legacy import.

        Running it again after a successful import is a no-op, since the
        embedded comment arrays are emptied.

        Raises:
            ConflictError: If content changed while it was being imported
        """
        result = await self.importer.run()
        return ImportLegacyCommentsResponse(
            message=f"Imported {result.imported} comments",
            imported=result.imported,
            documents=result.documents,
        )
