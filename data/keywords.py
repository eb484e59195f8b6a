"""Fixed Arabic keyword tables for diet plan text.

Order matters: longer forms are listed before the shorter aliases that are
textual prefixes of them, and matching walks these sequences front to back.
"""

# Meal-section titles, highest priority first
MEAL_TITLES = (
    'وجبة الإفطار', 'الإفطار', 'الفطار',
    'وجبة خفيفة', 'سناك',
    'الغداء',
    'وجبة قبل التمرين', 'قبل التمرين',
    'وجبة بعد التمرين', 'بعد التمرين',
    'العشاء',
    'ملاحظات عامة', 'ملاحظات',
    'وجبة السحور', 'السحور',
)

MEAL_ICONS = {
    'وجبة الإفطار': '🌅',
    'الإفطار': '🌅',
    'الفطار': '🌅',
    'وجبة خفيفة': '🍎',
    'سناك': '🍎',
    'الغداء': '🍽️',
    'وجبة قبل التمرين': '💪',
    'قبل التمرين': '💪',
    'وجبة بعد التمرين': '🏋️',
    'بعد التمرين': '🏋️',
    'العشاء': '🌙',
    'ملاحظات عامة': '📝',
    'ملاحظات': '📝',
    'وجبة السحور': '🌙',
    'السحور': '🌙',
}

DEFAULT_ICON = '🍴'

# A title containing this word opens a notes section
NOTES_MARKER = 'ملاحظات'

# (label, canonical stat key); two carb spellings share one key
MACRO_KEYWORDS = (
    ('سعرات', 'calories'),
    ('بروتين', 'protein'),
    ('كارب', 'carbs'),
    ('كربوهيدرات', 'carbs'),
    ('دهون', 'fats'),
)

# Every keyword that must start its own line
LINE_BREAK_KEYWORDS = MEAL_TITLES + tuple(label for label, _ in MACRO_KEYWORDS)

# Summary block order: (key, label, unit)
MACRO_SUMMARY = (
    ('calories', 'السعرات', 'kcal'),
    ('protein', 'البروتين', 'g'),
    ('carbs', 'الكارب', 'g'),
    ('fats', 'الدهون', 'g'),
)

STAT_KEYS = tuple(key for key, _, _ in MACRO_SUMMARY)
