"""Configuration for the label resolver."""

import os
from dataclasses import dataclass

from d365_labels.domain.constants import DEFAULT_LANGUAGE, FALLBACK_LANGUAGE

ENV_PACKAGES_DIR = 'D365_PACKAGES_DIR'
ENV_LANGUAGE = 'D365_LABEL_LANGUAGE'
ENV_BATCH_WORKERS = 'D365_LABEL_BATCH_WORKERS'


@dataclass
class LabelConfig:
    """Options controlling label lookup.

    ``packages_dir`` is the root of the package/model tree
    (``PackagesLocalDirectory`` on a development box). ``batch_workers``
    above 1 resolves the per-file groups of a batch in parallel.
    """

    packages_dir: str | None = None
    default_language: str = DEFAULT_LANGUAGE
    fallback_language: str = FALLBACK_LANGUAGE
    batch_workers: int = 1

    @classmethod
    def from_env(cls, packages_dir: str | None = None) -> 'LabelConfig':
        """Build a config from ``D365_*`` environment variables.

        An explicit ``packages_dir`` (e.g. from a CLI flag) wins over the
        environment.
        """
        workers = os.environ.get(ENV_BATCH_WORKERS, '')
        return cls(
            packages_dir=packages_dir or os.environ.get(ENV_PACKAGES_DIR) or None,
            default_language=os.environ.get(ENV_LANGUAGE) or DEFAULT_LANGUAGE,
            batch_workers=int(workers) if workers.isdigit() and int(workers) > 0 else 1,
        )
