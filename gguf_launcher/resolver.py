"""
Model and prompt-template resolution.

Sequences cache discovery, interactive choice and download into one decision
procedure that yields a concrete (model path, prompt template) pair. Every
fatal step raises a LauncherError subclass identifying the stage that failed.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from .acquire import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    LocalModel,
    RemoteModel,
    acquire_model,
)
from .cache import scan_cached_models
from .chooser import Chooser
from .errors import ModelSelectionCancelled, TemplateSelectionCancelled
from .templates import TEMPLATE_IDS, PromptTemplateType, parse

logger = logging.getLogger(__name__)

# Extra menu entry that sends the user to the url prompt
CATALOG_HINT = (
    "Or choose one from: https://huggingface.co/second-state?sort_models=modified#models "
    "or https://huggingface.co/models?sort=trending&search=gguf"
)


@dataclass(frozen=True)
class ResolvedSelection:
    """Model file and prompt template handed to the backend launcher."""

    model_path: str
    template: PromptTemplateType


class ModelResolver:
    """Resolve a model and a prompt template from partial user input."""

    def __init__(
        self,
        chooser: Chooser,
        directory: str = ".",
        download_timeout: float = DEFAULT_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        session: Optional[requests.Session] = None,
        show_progress: bool = False,
    ):
        """
        Initialize the resolver.

        Args:
            chooser: Source of interactive answers
            directory: Models directory, scanned for cache hits and used for downloads
            download_timeout: Connect/read timeout in seconds for downloads
            chunk_size: Bytes per streamed download chunk
            session: Optional requests session used for downloads
            show_progress: Show a progress bar while downloading
        """
        self.chooser = chooser
        self.directory = directory
        self.download_timeout = download_timeout
        self.chunk_size = chunk_size
        self.session = session
        self.show_progress = show_progress

    def _acquire(self, source) -> str:
        return acquire_model(
            source,
            directory=self.directory,
            timeout=self.download_timeout,
            chunk_size=self.chunk_size,
            session=self.session,
            show_progress=self.show_progress,
        )

    def resolve_model(self, model: Optional[str] = None) -> str:
        """
        Pick the model file to launch.

        An explicit model is used as-is. Otherwise cached models are offered
        first, and the user is asked for a url when there are none or when
        they pick the catalog entry.

        Returns:
            Local path of the model file

        Raises:
            ModelSelectionCancelled: If the user cancels a model prompt
            DirectoryUnreadable: If the models directory cannot be listed
            AcquireError: If the download fails
        """
        if model:
            logger.info(f"Model given explicitly: {model}")
            return self._acquire(LocalModel(model))

        cached = scan_cached_models(self.directory)
        if cached:
            options = cached + [CATALOG_HINT]
            selection = self.chooser.choose("Select a cached model", options, default=0)
            if selection is None:
                raise ModelSelectionCancelled()
            if selection < len(cached):
                path = str(Path(self.directory) / cached[selection])
                logger.info(f"Selected cached model: {path}")
                return path
        else:
            logger.info("No cached models, asking for a url")

        url = self.chooser.ask_text("Enter the model url")
        if url is None:
            raise ModelSelectionCancelled()
        return self._acquire(RemoteModel(url))

    def resolve_template(
        self, preset: Optional[PromptTemplateType] = None
    ) -> PromptTemplateType:
        """
        Pick the prompt template.

        A template given on the command line is used without prompting.

        Raises:
            TemplateSelectionCancelled: If the user cancels the menu
        """
        if preset is not None:
            logger.info(f"Prompt template given explicitly: {preset}")
            return preset

        selection = self.chooser.choose("Select a prompt template", TEMPLATE_IDS, default=0)
        if selection is None:
            raise TemplateSelectionCancelled()

        template = parse(TEMPLATE_IDS[selection])
        logger.info(f"Selected prompt template: {template}")
        return template

    def resolve(
        self,
        model: Optional[str] = None,
        prompt_template: Optional[PromptTemplateType] = None,
    ) -> ResolvedSelection:
        """Resolve the model, then the template."""
        model_path = self.resolve_model(model)
        template = self.resolve_template(prompt_template)
        return ResolvedSelection(model_path=model_path, template=template)
