"""Shared test fixtures."""

from pathlib import Path

import pytest

from d365_labels.config import LabelConfig
from d365_labels.label_cache import LabelFileCache
from d365_labels.label_file_parser import read_label_file
from d365_labels.locator import LabelFileLocator
from d365_labels.resolution.label_resolver import LabelResolver


# ── Sample Label Files ───────────────────────────────────────────────────

SYS_EN_US = """\
Company:Company
;Name of the legal entity
CustAccount:Customer account
Blank:
"""

SYS_DE_DE = """\
Company:Unternehmen
;Name der juristischen Person
"""

ACCOUNTS_RECEIVABLE_EN_US = """\
CustTable:Customers
;Customer master table
CustGroup:Customer group
"""

CONTOSO_EN_US = """\
Greeting:Hello
"""


def write_label_file(root: Path, package: str, model: str, language: str,
                     file_id: str, content: str) -> Path:
    """Write a label file at its place in the package/model tree."""
    path = (root / package / model / 'AxLabelFile' / 'LabelResources'
            / language / f'{file_id}.{language}.label.txt')
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def packages_dir(tmp_path):
    """A small PackagesLocalDirectory with three packages."""
    root = tmp_path / 'PackagesLocalDirectory'
    write_label_file(root, 'ApplicationPlatform', 'ApplicationPlatform', 'en-US', 'SYS', SYS_EN_US)
    write_label_file(root, 'ApplicationPlatform', 'ApplicationPlatform', 'de-DE', 'SYS', SYS_DE_DE)
    write_label_file(root, 'ApplicationSuite', 'Foundation', 'en-US', 'AccountsReceivable',
                     ACCOUNTS_RECEIVABLE_EN_US)
    write_label_file(root, 'ContosoExtensions', 'ContosoExt', 'en-US', 'Contoso', CONTOSO_EN_US)
    # A model without labels and a stray file at package level
    (root / 'ApplicationSuite' / 'Empty').mkdir(parents=True)
    (root / 'README.txt').write_text('not a package', encoding='utf-8')
    return root


class CountingLocator(LabelFileLocator):
    """Locator that records every ``find`` call."""

    def __init__(self, packages_dir):
        super().__init__(packages_dir)
        self.find_calls: list[tuple[str, str]] = []

    def find(self, file_id, language):
        self.find_calls.append((file_id, language))
        return super().find(file_id, language)


class CountingLoader:
    """Label file loader that records every parse."""

    def __init__(self):
        self.paths: list[str] = []

    def __call__(self, path):
        self.paths.append(path)
        return read_label_file(path)


@pytest.fixture
def counting_loader():
    return CountingLoader()


@pytest.fixture
def counting_locator(packages_dir):
    return CountingLocator(str(packages_dir))


@pytest.fixture
def resolver(packages_dir):
    return LabelResolver(LabelConfig(packages_dir=str(packages_dir)))


@pytest.fixture
def instrumented_resolver(packages_dir, counting_locator, counting_loader):
    """Resolver whose locator and cache loader count their calls."""
    return LabelResolver(
        LabelConfig(packages_dir=str(packages_dir)),
        cache=LabelFileCache(loader=counting_loader),
        locator=counting_locator,
    )


@pytest.fixture
def write_labels():
    """The ``write_label_file`` helper, for tests that build their own tree."""
    return write_label_file
