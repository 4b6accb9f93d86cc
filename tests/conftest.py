from pathlib import Path

import pytest

from tests.fixtures import FARM_FIXTURE, FARM_OUTLINE


@pytest.fixture
def feature_dir(tmp_path: Path) -> Path:
    directory = tmp_path / 'features'
    (directory / 'nested').mkdir(parents=True)

    (directory / 'farm.feature').write_text(FARM_FIXTURE, encoding='utf-8')
    (directory / 'nested' / 'outline.feature').write_text(FARM_OUTLINE, encoding='utf-8')
    (directory / 'broken.feature').write_text(
        '''Feature: Broken
Scenario Outline: titled examples
    Given a <value>
Examples: with a title
    | value |
    | 1     |
''',
        encoding='utf-8',
    )

    return directory
