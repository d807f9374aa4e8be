"""Unit tests for PhpExtractor."""

import unittest

from object_design_linter.domain.entities import CallKind, DeclarationKind, Parameter
from object_design_linter.domain.errors import ParseError
from object_design_linter.infrastructure.extractors.php_extractor import PhpExtractor

CREDENTIALS = """<?php

declare(strict_types=1);

class Credentials
{
    private string $userName;
    private string $password;

    public function __construct(string $userName, string $password)
    {
        $this->userName = $userName;
        $this->password = $password;
    }

    public function userName(): string
    {
        return $this->userName;
    }

    public function password(): string
    {
        return $this->password;
    }
}
"""

MAILER = """<?php
namespace App\\Mail;

use App\\Log\\Logger;
use function App\\Support\\helper;

final class Mailer extends BaseMailer implements MailerInterface
{
    public function __construct(
        #[Inject] private readonly Transport $transport,
        ?Logger $logger = null,
        string ...$tags
    ) {
        parent::__construct($transport);
        $this->logger = $logger ?? new NullLogger();
        $this->createdAt = new \\DateTimeImmutable();
        $this->headers['X-Mailer'] = 'odl';
    }

    public function setLogger(Logger $logger): void
    {
        $this->logger = $logger;
    }

    public function send(Message $message): int|false
    {
        $stamp = date('c');
        $handler = function ($x) use ($message) { return getenv('NOPE'); };
        $this->transport->deliver($message);
        return Clock::now()->getTimestamp();
    }

    abstract protected function &render(array &$context = []): string;
}

function helper(): ?string
{
    return null;
}
"""


class TestPhpExtractorStructure(unittest.TestCase):
    """Declarations found in a file."""

    def setUp(self) -> None:
        self.extractor = PhpExtractor()

    def test_credentials_declarations(self) -> None:
        declarations = self.extractor.extract(CREDENTIALS, "Test.php")
        self.assertEqual(
            [(d.kind, d.qualified_name, d.location.line) for d in declarations],
            [
                (DeclarationKind.CLASS, "Credentials", 5),
                (DeclarationKind.METHOD, "Credentials::__construct", 10),
                (DeclarationKind.METHOD, "Credentials::userName", 16),
                (DeclarationKind.METHOD, "Credentials::password", 21),
            ],
        )
        constructor = declarations[1]
        self.assertEqual(
            constructor.parameters,
            (Parameter("userName", "string"), Parameter("password", "string")),
        )
        self.assertEqual(constructor.body.call_sites, ())
        self.assertEqual(constructor.body.assigned_fields, frozenset({"userName", "password"}))
        self.assertEqual(declarations[2].return_type, "string")
        self.assertEqual(declarations[2].owner_constructor_parameters, ("userName", "password"))

    def test_mailer_declarations(self) -> None:
        names = [d.qualified_name for d in self.extractor.extract(MAILER, "src/Mailer.php")]
        self.assertEqual(
            names,
            ["Mailer", "Mailer::__construct", "Mailer::setLogger", "Mailer::send", "Mailer::render", "helper"],
        )

    def test_interfaces_traits_and_enums(self) -> None:
        source = """<?php
interface Clock { public function now(): \\DateTimeImmutable; }
trait Loggable { public function log(string $m): void {} }
enum Suit: string { case Hearts = 'H'; public function label(): string { return 'x'; } }
"""
        names = [d.qualified_name for d in self.extractor.extract(source)]
        self.assertEqual(
            names, ["Clock", "Clock::now", "Loggable", "Loggable::log", "Suit", "Suit::label"]
        )

    def test_class_constant_and_anonymous_class_are_not_declarations(self) -> None:
        source = """<?php
$name = Foo::class;
$obj = new class($x) extends Base { public function hidden() {} };
$fn = function () { return 1; };
"""
        self.assertEqual(self.extractor.extract(source), [])

    def test_braced_namespace_blocks(self) -> None:
        source = "<?php namespace A { class One {} } namespace B { function two() {} }"
        names = [d.qualified_name for d in self.extractor.extract(source)]
        self.assertEqual(names, ["One", "two"])


class TestPhpExtractorParameters(unittest.TestCase):
    """Parameter flags."""

    def setUp(self) -> None:
        declarations = PhpExtractor().extract(MAILER, "src/Mailer.php")
        self.by_name = {d.name: d for d in declarations}

    def test_constructor_parameters(self) -> None:
        constructor = self.by_name["__construct"]
        self.assertEqual(
            constructor.parameters,
            (
                Parameter("transport", "Transport"),
                Parameter("logger", "?Logger", has_default=True, is_nullable=True),
                Parameter("tags", "string"),
            ),
        )

    def test_null_default_makes_parameter_nullable(self) -> None:
        decl = PhpExtractor().extract("<?php class A { function __construct(Logger $l = null) {} }")[1]
        self.assertEqual(decl.parameters, (Parameter("l", "Logger", has_default=True, is_nullable=True),))

    def test_non_null_default(self) -> None:
        decl = PhpExtractor().extract("<?php function f(int $n = 3, array $a = []) {}")[0]
        self.assertEqual(
            decl.parameters,
            (Parameter("n", "int", has_default=True), Parameter("a", "array", has_default=True)),
        )

    def test_by_reference_and_return_type(self) -> None:
        render = self.by_name["render"]
        self.assertEqual(render.parameters, (Parameter("context", "array", has_default=True),))
        self.assertEqual(render.return_type, "string")
        self.assertEqual(render.body.call_sites, ())

    def test_union_return_type(self) -> None:
        self.assertEqual(self.by_name["send"].return_type, "int|false")
        self.assertEqual(self.by_name["helper"].return_type, "?string")


class TestPhpExtractorBodies(unittest.TestCase):
    """Body summaries."""

    def setUp(self) -> None:
        declarations = PhpExtractor().extract(MAILER, "src/Mailer.php")
        self.by_name = {d.name: d for d in declarations}

    def test_constructor_body(self) -> None:
        body = self.by_name["__construct"].body
        self.assertEqual(
            [(site.symbol, site.kind) for site in body.call_sites],
            [
                ("parent::__construct", CallKind.STATIC),
                ("NullLogger", CallKind.NEW),
                ("\\DateTimeImmutable", CallKind.NEW),
            ],
        )
        self.assertEqual(body.assigned_fields, frozenset({"logger", "createdAt", "headers"}))
        self.assertIsNone(body.source_of("logger"))

    def test_setter_body_records_source(self) -> None:
        setter = self.by_name["setLogger"]
        self.assertEqual(setter.body.source_of("logger"), "logger")
        self.assertEqual(setter.owner_constructor_parameters, ("transport", "logger", "tags"))

    def test_method_body_calls(self) -> None:
        body = self.by_name["send"].body
        self.assertEqual(
            body.call_symbols(),
            ("date", "getenv", "->deliver", "Clock::now", "->getTimestamp"),
        )

    def test_language_constructs_are_not_calls(self) -> None:
        source = "<?php function f($a) { if (isset($a)) { echo($a); } foreach ([] as $x) {} return array(1); }"
        self.assertEqual(PhpExtractor().extract(source)[0].body.call_sites, ())


class TestPhpExtractorErrors(unittest.TestCase):
    """Inputs that cannot be decomposed."""

    def assertParseError(self, source: str, line: int) -> None:
        with self.assertRaises(ParseError) as ctx:
            PhpExtractor().extract(source, "bad.php")
        self.assertEqual(ctx.exception.line, line)
        self.assertEqual(ctx.exception.path, "bad.php")

    def test_unclosed_brace(self) -> None:
        self.assertParseError("<?php\nclass A {\n  function f() {\n}", 2)

    def test_stray_closer(self) -> None:
        self.assertParseError("<?php\n}\n", 2)

    def test_mismatched_brackets(self) -> None:
        self.assertParseError("<?php\nfunction f() {\n  g(];\n}", 3)

    def test_class_without_body(self) -> None:
        self.assertParseError("<?php\nclass A;\n", 2)

    def test_class_without_name(self) -> None:
        self.assertParseError("<?php\nclass {}\n", 2)

    def test_unterminated_string_carries_path(self) -> None:
        self.assertParseError("<?php\n$a = 'x;\n", 2)
