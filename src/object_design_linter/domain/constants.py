"""
Object Design Linter: rule catalog identifiers and configuration defaults.
"""

# ODL: ANSI Cyan (\033[36m)
_CYAN: str = "\033[36m"
_RESET: str = "\033[0m"
_ODL_ART: str = r"""
   ____  ____  __
  / __ \/ __ \/ /     Object Design Linter
 / /_/ / /_/ / /___   constructor injection, value objects,
 \____/_____/_____/   explicit system boundaries
"""
ODL_BANNER = _CYAN + _ODL_ART + _RESET

CONFIG_SECTION: str = "object-design-linter"

RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY: str = "no-optional-constructor-dependency"
RULE_NO_SETTER_DEPENDENCY_INJECTION: str = "no-setter-dependency-injection"
RULE_NO_DIRECT_SYSTEM_CALL: str = "no-direct-system-call-in-method-body"
RULE_SINGLE_SHAPE_RETURN: str = "return-type-must-be-single-shape"
RULE_SIDE_EFFECT_FREE_CONSTRUCTOR: str = "constructor-must-be-side-effect-free"

# Catalog order. Reports never depend on it; the registry preserves it.
RULE_IDS: tuple[str, ...] = (
    RULE_NO_OPTIONAL_CONSTRUCTOR_DEPENDENCY,
    RULE_NO_SETTER_DEPENDENCY_INJECTION,
    RULE_NO_DIRECT_SYSTEM_CALL,
    RULE_SINGLE_SHAPE_RETURN,
    RULE_SIDE_EFFECT_FREE_CONSTRUCTOR,
)

# Type names that denote behaviour rather than data. Matched against the bare
# type name (namespace and nullable markers stripped) with re.fullmatch.
# DateTimeInterface is a value type despite its suffix.
DEFAULT_SERVICE_TYPE_PATTERN: str = (
    r"(?!DateTimeInterface\Z)(?:[A-Z][A-Za-z0-9_]*)?"
    r"(?:Logger|Service|Repository|Gateway|Client|Adapter|Factory|Handler|Provider"
    r"|Clock|Mailer|Dispatcher|Bus|Storage|Reporter|Renderer|Interface|Protocol)"
)

# Declarations (or their owning classes) allowed to reach outside the process.
DEFAULT_SYSTEM_BOUNDARY_PATTERN: str = (
    r"(?:[A-Z][A-Za-z0-9_]*)?(?:Factory|Clock|Gateway|Adapter|Boundary|Environment)"
    r"|create[A-Z_]\w*|from[A-Z_]\w*|main"
)

# Bare entries match a call symbol exactly; dotted entries also match as a
# dotted suffix (``datetime.now`` matches ``datetime.datetime.now``).
DEFAULT_BANNED_SYSTEM_CALL_SYMBOLS: frozenset[str] = frozenset(
    {
        # PHP clock, environment, filesystem and randomness
        "DateTime",
        "DateTimeImmutable",
        "time",
        "date",
        "microtime",
        "hrtime",
        "mktime",
        "strtotime",
        "getenv",
        "putenv",
        "file_get_contents",
        "file_put_contents",
        "fopen",
        "rand",
        "mt_rand",
        "random_int",
        "uniqid",
        # Python equivalents
        "datetime.now",
        "datetime.utcnow",
        "datetime.today",
        "date.today",
        "time.time",
        "time.monotonic",
        "os.getenv",
        "os.environ.get",
        "open",
        "random.random",
        "random.randint",
        "uuid.uuid4",
    }
)

# Calls a constructor may make without being flagged as a side effect.
# Compared lower-cased; Python delegation is any call ending in PARENT_INIT_SUFFIX.
PARENT_CONSTRUCTOR_CALLS: frozenset[str] = frozenset({"parent::__construct", "super"})
PARENT_INIT_SUFFIX: str = ".__init__"

NO_VIOLATIONS_MARKER: str = "No violations found."

SUPPORTED_SUFFIXES: tuple[str, ...] = (".php", ".py")
