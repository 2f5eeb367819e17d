"""Common literal values used across draft_budget.

These constants keep snapshot keys, the default section template, and storage
names centralized so the codec, the state machine, and tests import the same
values without drifting. Intended for internal use within the draft_budget
package.

Examples
--------
>>> from draft_budget import _constants
>>> [title for title, _ in _constants.DEFAULT_SECTION_TEMPLATE][:2]
['提示', '要約']
>>> _constants.SNAPSHOT_TARGET_KEY
'typicalCount'
"""

DEFAULT_SECTION_TEMPLATE: tuple[tuple[str, int], ...] = (
    ("提示", 0),
    ("要約", 35),
    ("全体", 15),
    ("議論", 35),
    ("まとめ", 15),
)

SNAPSHOT_TARGET_KEY = "typicalCount"
SNAPSHOT_SECTIONS_KEY = "sections"

DEFAULT_STORAGE_KEY = "draft-budget"
