"""
Base extractor interface for modular extraction system.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, List
from pathlib import Path
from dataclasses import dataclass, field

from .callbacks import ExtractorCallbacks
from core.app_version import get_app_version
from sdk.base import ArtifactSink


@dataclass
class ExtractorMetadata:
    """
    Metadata about an extractor module.

    Attributes:
        name: Internal identifier (e.g., "mobile_xry")
        display_name: Display name (e.g., "XRY Mobile Reports")
        description: Short description
        category: Category for grouping ("mobile")
        requires_tools: External tools needed (none for report parsers)
        can_extract: Whether module has extraction phase
        can_ingest: Whether module has ingestion phase
    """
    name: str
    display_name: str
    description: str
    category: str
    requires_tools: List[str]
    can_extract: bool
    can_ingest: bool
    version: str = field(default_factory=get_app_version)


class BaseExtractor(ABC):
    """
    Base class for all extractor modules.

    Each module is responsible for:
    1. Declaring capabilities and requirements (metadata)
    2. Checking that its input is present (can_run_ingestion)
    3. Running ingestion phase - parse input into an artifact sink (run_ingestion)

    Example:
        class MyExtractor(BaseExtractor):
            @property
            def metadata(self):
                return ExtractorMetadata(
                    name="my_extractor",
                    display_name="My Extractor",
                    description="Does something useful",
                    category="mobile",
                    requires_tools=[],
                    can_extract=False,
                    can_ingest=True
                )

            def can_run_ingestion(self, input_dir):
                return True, ""

            def run_ingestion(self, input_dir, output_dir, sink, config, callbacks):
                callbacks.on_step("Parsing reports")
                # ...
                return {"messages": 123}
    """

    @property
    @abstractmethod
    def metadata(self) -> ExtractorMetadata:
        """
        Return module metadata.

        Returns:
            ExtractorMetadata describing this module
        """
        pass

    @abstractmethod
    def can_run_ingestion(self, input_dir: Path) -> tuple[bool, str]:
        """
        Check if ingestion can run (input files exist).

        Args:
            input_dir: Directory holding the files to ingest

        Returns:
            Tuple of (can_run, reason_if_not)

        Example:
            return True, ""
            return False, "No XRY reports found"
        """
        pass

    def get_output_dir(self, case_root: Path, evidence_label: str, config: Optional[Dict[str, Any]] = None) -> Path:
        """
        Return output directory for this extractor's files.

        Convention:
            {case_root}/evidences/{evidence_label}/{extractor_name}/

        Args:
            case_root: Root directory of case workspace
            evidence_label: Evidence label/slug (e.g., "pixel-4a")
            config: Optional configuration dict (may contain 'extractor_name' key)
        """
        name = (config or {}).get("extractor_name", self.metadata.name)
        return case_root / "evidences" / evidence_label / name

    @abstractmethod
    def run_ingestion(
        self,
        input_dir: Path,
        output_dir: Path,
        sink: ArtifactSink,
        config: Dict[str, Any],
        callbacks: ExtractorCallbacks
    ) -> Dict[str, int]:
        """
        Run ingestion phase (parse input files into the artifact sink).

        Responsibilities:
        - Parse files from input_dir
        - Hand records to sink
        - Write run summaries to output_dir
        - Report progress via callbacks
        - Handle cancellation

        Args:
            input_dir: Where the input files are located
            output_dir: Where to write summaries (created on demand)
            sink: Receives built artifacts
            config: Configuration dict
            callbacks: Progress/log/error callbacks

        Returns:
            Dictionary of artifact counts ingested
        """
        pass
