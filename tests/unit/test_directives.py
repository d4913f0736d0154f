"""Unit tests for source file directives."""

from jlaunch.source.directives import parse_directives, read_directives


class TestParseDirectives:
    def test_dependencies(self):
        directives = parse_directives(
            "//DEPS info.picocli:picocli:4.7.5\n"
            "//DEPS org.slf4j:slf4j-api:2.0.9, org.slf4j:slf4j-simple:2.0.9\n"
        )

        assert directives.dependencies == [
            "info.picocli:picocli:4.7.5",
            "org.slf4j:slf4j-api:2.0.9",
            "org.slf4j:slf4j-simple:2.0.9",
        ]

    def test_options_are_tokenized(self):
        directives = parse_directives(
            '//JAVA_OPTIONS -Xmx256m "-Dgreeting=hello world"\n'
            "//RUNTIME_OPTIONS --enable-preview\n"
            "//JAVAC_OPTIONS --release 21 --enable-preview\n"
        )

        assert directives.runtime_options == [
            "-Xmx256m",
            "-Dgreeting=hello world",
            "--enable-preview",
        ]
        assert directives.compile_options == ["--release", "21", "--enable-preview"]

    def test_java_version_last_wins(self):
        directives = parse_directives("//JAVA 11\n//JAVA 17+\n")
        assert directives.java_version == "17+"

    def test_description_lines_joined(self):
        directives = parse_directives("//DESCRIPTION First line\n//DESCRIPTION Second line\n")
        assert directives.description == "First line\nSecond line"

    def test_no_description(self):
        assert parse_directives("class A {}").description is None

    def test_scalar_directives(self):
        directives = parse_directives(
            "//GAV com.example:hello:1.0\n"
            "//MAIN com.example.Hello\n"
            "//CDS\n"
            "//REPOS mavencentral,acme=https://repo.acme.com/maven\n"
            "//SOURCES Util.java model/*.java\n"
        )

        assert directives.gav == "com.example:hello:1.0"
        assert directives.main_class == "com.example.Hello"
        assert directives.enable_cds is True
        assert directives.repositories == ["mavencentral", "acme=https://repo.acme.com/maven"]
        assert directives.sources == ["Util.java", "model/*.java"]

    def test_triple_slash_is_a_comment(self):
        directives = parse_directives('///usr/bin/env jlaunch "$0" "$@" ; exit $?\n///DEPS a:b:1\n')
        assert directives.dependencies == []

    def test_directive_must_start_line(self):
        directives = parse_directives("  //DEPS a:b:1\nint x; //DEPS c:d:1\n")
        assert directives.dependencies == []

    def test_prefix_is_not_a_directive(self):
        directives = parse_directives("//DEPSX a:b:1\n//JAVAFOO 11\n")
        assert directives.dependencies == []
        assert directives.java_version is None

    def test_package_detected(self):
        directives = parse_directives("//DEPS a:b:1\n\npackage com.example.app;\n\nclass A {}\n")
        assert directives.package == "com.example.app"

    def test_read_directives(self, hello_java):
        directives = read_directives(hello_java)

        assert directives.dependencies == ["info.picocli:picocli:4.7.5"]
        assert directives.java_version == "17+"
        assert directives.package == "demo"
        assert directives.description == "Says hello"
