"""Document upload pipeline: submit, add version, edit, delete.

Commands validate their input and commit the new document state before
returning; storing the bytes and the AI validation pass run in a tracked
background task that commits its result through the same per-document
update path as every other write.
"""

from __future__ import annotations

import asyncio

from clinidocs.application.dtos.document import DocumentMetadataInput, FileUpload
from clinidocs.application.interfaces.repositories import IDocumentStore
from clinidocs.application.interfaces.services import IBlobStore, IValidationService
from clinidocs.application.services.validation_interpreter import interpret_findings
from clinidocs.domain.entities import Document, Version, VersionDraft
from clinidocs.domain.enums import DocumentStatus, DocumentType, StatusReason
from clinidocs.domain.exceptions import (
    ResourceNotFoundException,
    StorageException,
    ValidationException,
    ValidationServiceFailure,
)
from clinidocs.domain.mutations import (
    AppendVersion,
    ApplyFindings,
    DocumentMutation,
    EditMetadata,
    MarkStored,
    RecordFailure,
    SetProcessing,
)
from clinidocs.domain.value_objects import DocumentTags, FileType
from clinidocs.shared.telemetry.logging import get_logger
from clinidocs.shared.utils.datetime import utc_now
from clinidocs.shared.utils.generators import compute_checksum, generate_cuid
from clinidocs.shared.utils.sanitization import InputSanitizer, sanitize_text

logger = get_logger(__name__)

DEFAULT_MAX_UPLOAD_SIZE = 50 * 1024 * 1024
DEFAULT_VALIDATION_TIMEOUT = 30.0
INCOMPLETE_FINDINGS = "incomplete findings: match flags missing"


def _required_text(value: str | None, field: str) -> str:
    cleaned = _optional_text(value)
    if not cleaned:
        raise ValidationException(f"{field} is required", field=field)
    return cleaned


def _optional_text(value: str | None) -> str:
    return sanitize_text((value or "").strip())


def _parse_type(raw: DocumentType | str | None) -> DocumentType:
    try:
        return DocumentType.parse(raw)
    except ValueError as e:
        raise ValidationException(str(e), field="type") from e


def _normalize_tags(raw) -> DocumentTags:
    return DocumentTags.from_iterable(sanitize_text(t) for t in (raw or ()) if t)


def _metadata_edit(title, type, tags) -> EditMetadata | None:
    """Validated EditMetadata for the given fields, or None when all are None."""
    if title is None and type is None and tags is None:
        return None
    return EditMetadata(
        title=_required_text(title, "title") if title is not None else None,
        type=_parse_type(type) if type is not None else None,
        tags=_normalize_tags(tags) if tags is not None else None,
    )


class DocumentUploadPipeline:
    """Accept documents immediately, store and validate them asynchronously.

    Every command raises ValidationException (bad input) or
    ResourceNotFoundException (unknown document) before touching state.
    Storage and validation-service failures never reach the caller; they
    end the version in status ERROR with a reason saying which one failed.
    """

    def __init__(
        self,
        store: IDocumentStore,
        blob_store: IBlobStore,
        validation_service: IValidationService,
        *,
        validation_timeout: float = DEFAULT_VALIDATION_TIMEOUT,
        max_upload_size: int = DEFAULT_MAX_UPLOAD_SIZE,
    ) -> None:
        self.store = store
        self.blob_store = blob_store
        self.validation_service = validation_service
        self.validation_timeout = validation_timeout
        self.max_upload_size = max_upload_size
        self._tasks: set[asyncio.Task[None]] = set()

    # ---- input checks ----

    def _check_upload(self, upload: FileUpload) -> str | None:
        """Validate the file and return its sanitized name.

        None when the client sent no usable name; the stored version is then
        named after its id.
        """
        if not upload.content:
            raise ValidationException("File content is empty", field="file")
        if len(upload.content) > self.max_upload_size:
            raise ValidationException(
                f"File exceeds maximum size of {self.max_upload_size} bytes",
                field="file",
            )
        try:
            return InputSanitizer.sanitize_filename(upload.filename)
        except ValueError:
            logger.info(
                "Unusable file name %r; naming the blob after its version",
                upload.filename,
            )
            return None

    @staticmethod
    def _check_patient_id(patient_id: str) -> str:
        patient_id = (patient_id or "").strip()
        if not patient_id:
            raise ValidationException("patient_id is required", field="patient_id")
        try:
            return InputSanitizer.sanitize_identifier(patient_id)
        except ValueError as e:
            raise ValidationException(str(e), field="patient_id") from e

    def _generate_storage_ref(
        self,
        patient_id: str,
        document_id: str,
        version_id: str,
        filename: str,
    ) -> str:
        return f"patients/{patient_id}/documents/{document_id}/{version_id}/{filename}"

    def _build_draft(
        self,
        patient_id: str,
        document_id: str,
        uploaded_by: str,
        filename: str | None,
        upload: FileUpload,
    ) -> VersionDraft:
        version_id = generate_cuid()
        filename = filename or version_id
        return VersionDraft(
            id=version_id,
            upload_date=utc_now(),
            uploaded_by=uploaded_by,
            blob_ref=self._generate_storage_ref(
                patient_id, document_id, version_id, filename
            ),
            filename=filename,
            file_size=len(upload.content),
            checksum=compute_checksum(upload.content),
        )

    # ---- commands ----

    async def submit(
        self,
        patient_id: str,
        metadata: DocumentMetadataInput,
        upload: FileUpload,
    ) -> Document:
        """Create a document with version 1 and start validating it.

        Returns:
            The stored document, status PROCESSING.

        Raises:
            ValidationException: Missing patient id, title or bytes, unknown
                type, or file too large. Nothing is created.
        """
        patient_id = self._check_patient_id(patient_id)
        title = _required_text(metadata.title, "title")
        document_type = _parse_type(metadata.type)
        uploaded_by = _optional_text(metadata.uploaded_by)
        filename = self._check_upload(upload)
        tags = _normalize_tags(metadata.tags)

        document_id = generate_cuid()
        draft = self._build_draft(patient_id, document_id, uploaded_by, filename, upload)
        document = Document(
            id=document_id,
            patient_id=patient_id,
            title=title,
            type=document_type,
            file_type=FileType.from_filename(upload.filename),
            upload_date=draft.upload_date,
            uploaded_by=uploaded_by,
            tags=tags,
            status=DocumentStatus.PROCESSING,
            created_at=draft.upload_date,
            updated_at=draft.upload_date,
        )
        stored = await self.store.create(document, draft)
        logger.info(
            "Document %s created for patient %s (type=%s, size=%d)",
            stored.id,
            patient_id,
            document_type.value,
            draft.file_size,
        )
        self._spawn(stored, upload)
        return stored

    async def add_version(
        self,
        document_id: str,
        upload: FileUpload,
        uploaded_by: str = "",
        *,
        title: str | None = None,
        type: DocumentType | str | None = None,
        tags: list[str] | None = None,
    ) -> Version:
        """Append a new current version and re-validate the document.

        title, type and tags, when given, are edited in the same atomic
        update as the append; None keeps the current value. Concurrent calls
        for the same document queue on its lock and get consecutive numbers.

        Raises:
            ResourceNotFoundException: Unknown document.
            ValidationException: Empty bytes, file too large, blank title or
                unknown type.
        """
        uploaded_by = _optional_text(uploaded_by)
        filename = self._check_upload(upload)
        metadata_edit = _metadata_edit(title, type, tags)
        current = await self.store.get(document_id)
        if current is None:
            raise ResourceNotFoundException("document", document_id)

        draft = self._build_draft(
            current.patient_id, document_id, uploaded_by, filename, upload
        )
        mutations: list[DocumentMutation] = [AppendVersion(draft)]
        if metadata_edit is not None:
            mutations.append(metadata_edit)
        mutations.append(SetProcessing())
        updated = await self.store.update(document_id, *mutations)
        if updated is None:
            raise ResourceNotFoundException("document", document_id)
        version = updated.latest
        assert version is not None and version.id == draft.id
        logger.info("Document %s version %d appended", document_id, version.version)
        self._spawn(updated, upload)
        return version

    async def edit(
        self,
        document_id: str,
        *,
        title: str | None = None,
        type: DocumentType | str | None = None,
        tags: list[str] | None = None,
    ) -> Document:
        """Edit title, type and/or tags. None leaves a field unchanged.

        Does not re-run validation; the status belongs to the stored bytes.
        """
        mutation = _metadata_edit(title, type, tags) or EditMetadata()
        updated = await self.store.update(document_id, mutation)
        if updated is None:
            raise ResourceNotFoundException("document", document_id)
        logger.info("Document %s metadata edited", document_id)
        return updated

    async def delete(self, document_id: str) -> None:
        """Remove the document and all versions, then delete stored blobs.

        A validation pass still running for this document finds nothing to
        commit to and its result is dropped.
        """
        removed = await self.store.delete(document_id)
        if removed is None:
            raise ResourceNotFoundException("document", document_id)
        logger.info(
            "Document %s deleted (%d versions)", document_id, len(removed.versions)
        )
        for version in removed.versions:
            await self._delete_blob(version.blob_ref)

    async def get_versions(self, document_id: str) -> list[Version]:
        """Return all versions, ascending by number."""
        versions = await self.store.list_versions(document_id)
        if versions is None:
            raise ResourceNotFoundException("document", document_id)
        return versions

    async def get_version_content(self, document_id: str, version: int) -> tuple[Version, bytes]:
        """Return a version and its stored bytes.

        Raises:
            ResourceNotFoundException: Unknown document or version number.
            StorageNotFoundError: The bytes were never stored (storage failure).
        """
        for v in await self.get_versions(document_id):
            if v.version == version:
                return v, await self.blob_store.get(v.blob_ref)
        raise ResourceNotFoundException("version", f"{document_id}/v{version}")

    # ---- background processing ----

    def _spawn(self, document: Document, upload: FileUpload) -> None:
        version = document.latest
        assert version is not None
        task = asyncio.create_task(
            self._process_version(document.id, version, document.type, upload),
            name=f"validate-{document.id}-v{version.version}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning("Background task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Background task %s failed", task.get_name(), exc_info=exc
            )

    async def _commit(
        self, document_id: str, version: int, mutation: DocumentMutation
    ) -> Document | None:
        """Commit a result for version. Returns None when it was discarded."""
        updated = await self.store.update(document_id, mutation)
        if updated is None:
            logger.info(
                "Result for document %s v%d discarded: document deleted",
                document_id,
                version,
            )
            return None
        if not updated.is_current(version):
            logger.info(
                "Result for document %s v%d discarded: superseded by v%d",
                document_id,
                version,
                updated.current_version,
            )
            return None
        return updated

    async def _process_version(
        self,
        document_id: str,
        version: Version,
        document_type: DocumentType,
        upload: FileUpload,
    ) -> None:
        number = version.version
        try:
            blob_ref = await self.blob_store.put(
                version.blob_ref, upload.content, upload.content_type
            )
        except StorageException as e:
            logger.error(
                "Storing document %s v%d failed: %s", document_id, number, e.message
            )
            await self._commit(
                document_id,
                number,
                RecordFailure(number, StatusReason.STORAGE_FAILURE, e.message),
            )
            return

        if await self._commit(document_id, number, MarkStored(number, blob_ref)) is None:
            if await self.store.get(document_id) is None:
                # Deleted while the bytes were in flight; nothing references them now.
                await self._delete_blob(blob_ref)
            return
        logger.info("Document %s v%d stored at %s", document_id, number, blob_ref)

        try:
            findings = await asyncio.wait_for(
                self.validation_service.validate(blob_ref, document_type),
                timeout=self.validation_timeout,
            )
        except TimeoutError:
            error = f"timed out after {self.validation_timeout:g}s"
        except ValidationServiceFailure as e:
            error = e.details.get("reason", e.message)
        except Exception as e:
            logger.exception("Validation service raised for document %s", document_id)
            error = str(e) or type(e).__name__
        else:
            outcome = interpret_findings(findings)
            if outcome.reason is not StatusReason.VALIDATION_SERVICE_FAILURE:
                committed = await self._commit(
                    document_id,
                    number,
                    ApplyFindings(number, outcome.status, outcome.reason, findings),
                )
                if committed is not None:
                    logger.info(
                        "Document %s v%d validated: status=%s reason=%s",
                        document_id,
                        number,
                        outcome.status.value,
                        outcome.reason.value if outcome.reason else None,
                    )
                return
            # The service answered without being able to check identity.
            error = findings.error or INCOMPLETE_FINDINGS

        logger.warning(
            "Validation of document %s v%d could not complete: %s",
            document_id,
            number,
            error,
        )
        await self._commit(
            document_id,
            number,
            RecordFailure(number, StatusReason.VALIDATION_SERVICE_FAILURE, error),
        )

    async def _delete_blob(self, blob_ref: str) -> None:
        try:
            await self.blob_store.delete(blob_ref)
        except StorageException as e:
            logger.warning("Could not delete blob %s: %s", blob_ref, e.message)

    @property
    def pending(self) -> int:
        """Number of background tasks still running."""
        return len(self._tasks)

    async def wait_idle(self, timeout: float | None = None) -> bool:
        """Wait until no background task is running.

        Tasks spawned while waiting are awaited too.

        Returns:
            False if tasks were still running when timeout elapsed.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while self._tasks:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                return False
            await asyncio.wait(set(self._tasks), timeout=remaining)
        return True

    async def shutdown(self, timeout: float) -> None:
        """Drain background tasks, cancelling any still running after timeout."""
        if await self.wait_idle(timeout):
            return
        pending = list(self._tasks)
        logger.warning("Cancelling %d unfinished validation tasks", len(pending))
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
