# A group needs at least this many tabs to be created.
MIN_GROUP_SIZE = 2

DOMAIN_GROUP_COLOR = 'grey'
TITLE_GROUP_COLOR = 'purple'

DEFAULT_COLLAPSED = True

# Sentence-terminal punctuation removed from titles before tokenizing.
TITLE_PUNCTUATION = '.,?!，。？！'
