"""
Preset separator tables, keyed by language.

Each table lists marker strings from the most to the least preferred split
point. The recursive splitter tries them in order; everything here is data.
"""

from ..exceptions import ConfigurationError


DEFAULT_SEPARATORS = ["\n\n", "\n", " ", ""]

# Shared tail: paragraphs, lines, words, characters
_LINE_SEPARATORS = ["\n\n", "\n", " ", ""]

SEPARATORS_BY_LANGUAGE: dict[str, list[str]] = {
    "cpp": [
        # Class definitions
        "\nclass ",
        # Function definitions
        "\nvoid ",
        "\nint ",
        "\nfloat ",
        "\ndouble ",
        # Control flow
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nswitch ",
        "\ncase ",
        *_LINE_SEPARATORS,
    ],
    "go": [
        "\nfunc ",
        "\nvar ",
        "\nconst ",
        "\ntype ",
        "\nif ",
        "\nfor ",
        "\nswitch ",
        "\ncase ",
        *_LINE_SEPARATORS,
    ],
    "java": [
        "\nclass ",
        # Method definitions
        "\npublic ",
        "\nprotected ",
        "\nprivate ",
        "\nstatic ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nswitch ",
        "\ncase ",
        *_LINE_SEPARATORS,
    ],
    "js": [
        "\nfunction ",
        "\nconst ",
        "\nlet ",
        "\nvar ",
        "\nclass ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nswitch ",
        "\ncase ",
        "\ndefault ",
        *_LINE_SEPARATORS,
    ],
    "php": [
        "\nfunction ",
        "\nclass ",
        "\nif ",
        "\nforeach ",
        "\nwhile ",
        "\ndo ",
        "\nswitch ",
        "\ncase ",
        *_LINE_SEPARATORS,
    ],
    "proto": [
        "\nmessage ",
        "\nservice ",
        "\nenum ",
        "\noption ",
        "\nimport ",
        "\nsyntax ",
        *_LINE_SEPARATORS,
    ],
    "python": [
        "\nclass ",
        "\ndef ",
        "\n\tdef ",
        *_LINE_SEPARATORS,
    ],
    "rst": [
        # Section titles
        "\n===\n",
        "\n---\n",
        "\n***\n",
        # Directives
        "\n.. ",
        *_LINE_SEPARATORS,
    ],
    "ruby": [
        "\ndef ",
        "\nclass ",
        "\nif ",
        "\nunless ",
        "\nwhile ",
        "\nfor ",
        "\ndo ",
        "\nbegin ",
        "\nrescue ",
        *_LINE_SEPARATORS,
    ],
    "rust": [
        "\nfn ",
        "\nconst ",
        "\nlet ",
        "\nif ",
        "\nwhile ",
        "\nfor ",
        "\nloop ",
        "\nmatch ",
        "\nconst ",
        *_LINE_SEPARATORS,
    ],
    "scala": [
        "\nclass ",
        "\nobject ",
        "\ndef ",
        "\nval ",
        "\nvar ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\nmatch ",
        "\ncase ",
        *_LINE_SEPARATORS,
    ],
    "swift": [
        "\nfunc ",
        "\nclass ",
        "\nstruct ",
        "\nenum ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\ndo ",
        "\nswitch ",
        "\ncase ",
        *_LINE_SEPARATORS,
    ],
    "markdown": [
        # Headings, starting with level 2 (setext headings are not handled)
        "\n## ",
        "\n### ",
        "\n#### ",
        "\n##### ",
        "\n###### ",
        # End of code block
        "```\n\n",
        # Horizontal rules of exactly three characters
        "\n\n***\n\n",
        "\n\n---\n\n",
        "\n\n___\n\n",
        *_LINE_SEPARATORS,
    ],
    "latex": [
        # Sectioning
        "\n\\chapter{",
        "\n\\section{",
        "\n\\subsection{",
        "\n\\subsubsection{",
        # Environments
        "\n\\begin{enumerate}",
        "\n\\begin{itemize}",
        "\n\\begin{description}",
        "\n\\begin{list}",
        "\n\\begin{quote}",
        "\n\\begin{quotation}",
        "\n\\begin{verse}",
        "\n\\begin{verbatim}",
        # Math
        "\n\\begin{align}",
        "$$",
        "$",
        *_LINE_SEPARATORS,
    ],
    "html": [
        "<body>",
        "<div>",
        "<p>",
        "<br>",
        "<li>",
        "<h1>",
        "<h2>",
        "<h3>",
        "<h4>",
        "<h5>",
        "<h6>",
        "<span>",
        "<table>",
        "<tr>",
        "<td>",
        "<th>",
        "<ul>",
        "<ol>",
        "<header>",
        "<footer>",
        "<nav>",
        # Head
        "<head>",
        "<style>",
        "<script>",
        "<meta>",
        "<title>",
        " ",
        "",
    ],
    "sol": [
        # Compiler directives
        "\npragma ",
        "\nusing ",
        # Contracts
        "\ncontract ",
        "\ninterface ",
        "\nlibrary ",
        # Members
        "\nconstructor ",
        "\ntype ",
        "\nfunction ",
        "\nevent ",
        "\nmodifier ",
        "\nerror ",
        "\nstruct ",
        "\nenum ",
        "\nif ",
        "\nfor ",
        "\nwhile ",
        "\ndo while ",
        "\nassembly ",
        *_LINE_SEPARATORS,
    ],
}

SUPPORTED_LANGUAGES = tuple(SEPARATORS_BY_LANGUAGE)


def get_separators_for_language(language: str) -> list[str]:
    """
    Return the separator list for a language key.

    Args:
        language: One of SUPPORTED_LANGUAGES

    Returns:
        A fresh copy of the ordered separator list

    Raises:
        ConfigurationError: If the language key is not recognized
    """
    try:
        return list(SEPARATORS_BY_LANGUAGE[language])
    except KeyError:
        raise ConfigurationError(
            f"Language {language!r} is not supported. "
            f"Available languages: {', '.join(SUPPORTED_LANGUAGES)}"
        ) from None
