"""HTTP client for the remote character persistence service."""

from typing import TYPE_CHECKING

import aiohttp
import structlog

from heroforge.config import get_settings
from heroforge.errors import CharacterDocumentError

from .document import CharacterDocument, parse_document

if TYPE_CHECKING:
    from heroforge.character.sheet import CharacterSheet

logger = structlog.get_logger(__name__)


class CharacterStore:
    """
    Loads and saves one character snapshot at a fixed endpoint.

    ``GET url`` returns the document; ``POST url`` with a JSON body saves it.
    Failures are logged and reported to the caller, never retried.
    """

    def __init__(self, url: str | None = None, timeout: float | None = None) -> None:
        """
        Initialize the store client.

        Args:
            url: Character endpoint; defaults to the configured persistence_url
            timeout: Total request timeout in seconds
        """
        settings = get_settings()
        url = url or settings.persistence_url
        if not url:
            raise ValueError("No persistence URL configured (set HEROFORGE_PERSISTENCE_URL)")

        self.url = url
        self.timeout = aiohttp.ClientTimeout(
            total=timeout if timeout is not None else settings.persistence_timeout_seconds
        )

    async def load(self) -> CharacterDocument | None:
        """
        Fetch the saved character.

        Returns:
            The parsed document, or None if the service could not supply one
        """
        try:
            async with (
                aiohttp.ClientSession(timeout=self.timeout) as session,
                session.get(self.url) as resp,
            ):
                if not 200 <= resp.status < 300:
                    logger.warning("character_load_failed", url=self.url, status=resp.status)
                    return None
                data = await resp.json(content_type=None)

        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error("character_load_error", url=self.url, error=str(e))
            return None
        except ValueError as e:
            logger.error("character_load_bad_json", url=self.url, error=str(e))
            return None

        # Some services wrap the payload as {"body": {...}}
        if isinstance(data, dict) and isinstance(data.get("body"), dict):
            data = data["body"]

        try:
            document = parse_document(data)
        except CharacterDocumentError as e:
            logger.error("character_load_malformed", url=self.url, error=str(e))
            return None

        logger.info("character_loaded", url=self.url, fields=sorted(document.model_fields_set))
        return document

    async def save(self, document: CharacterDocument) -> bool:
        """
        Save a character snapshot.

        Returns:
            True if the service answered with a 2xx status, False otherwise
        """
        try:
            async with (
                aiohttp.ClientSession(timeout=self.timeout) as session,
                session.post(self.url, json=document.to_wire()) as resp,
            ):
                if 200 <= resp.status < 300:
                    logger.info("character_saved", url=self.url)
                    return True
                logger.warning("character_save_failed", url=self.url, status=resp.status)
                return False

        except (aiohttp.ClientError, TimeoutError) as e:
            logger.error("character_save_error", url=self.url, error=str(e))
            return False

    async def load_into(self, sheet: "CharacterSheet") -> bool:
        """
        Load the saved character into a sheet.

        Returns:
            True if a document was fetched and applied

        Raises:
            CharacterDocumentError: If the fetched document breaks the rules
        """
        document = await self.load()
        if document is None:
            return False
        sheet.apply_document(document)
        return True

    async def save_sheet(self, sheet: "CharacterSheet") -> bool:
        """Save the sheet's current snapshot."""
        return await self.save(sheet.to_document())
