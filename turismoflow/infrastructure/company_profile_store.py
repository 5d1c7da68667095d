"""
Company profile file store: the singleton agency record, with explicit load/save.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from turismoflow.domain.models import CompanyProfile
from turismoflow.infrastructure.record_loader import dump_company_profile, load_company_profile

_logger = logging.getLogger(__name__)


class CompanyProfileStore:
    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[CompanyProfile]:
        """None when no profile has been saved yet."""
        if not self.path.exists():
            return None
        with open(self.path, encoding="utf-8") as f:
            raw = json.load(f)
        return load_company_profile(raw)

    def save(self, profile: CompanyProfile) -> CompanyProfile:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(dump_company_profile(profile), f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)
        _logger.info("Company profile saved to %s", self.path)
        return profile
