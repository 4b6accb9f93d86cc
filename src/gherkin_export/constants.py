MARKER_COMMENT = '#'
MARKER_TAG = '@'
MARKER_TABLE = '|'
MARKER_ESCAPE = '\\'
MARKER_PLACEHOLDER_OPEN = '<'
MARKER_PLACEHOLDER_CLOSE = '>'
BYTE_ORDER_MARK = '\ufeff'

KEYWORDS_STEP = ['Given', 'When', 'Then', 'And', 'But', '*']

DEFAULT_OUTPUT_PATH = './gherkin_output'
