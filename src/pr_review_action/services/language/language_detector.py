"""Filename to programming language mapping."""

from pathlib import PurePosixPath
from typing import Dict, Optional

# File extension → language label
_EXT_TO_LANG: Dict[str, str] = {
    ".py": "Python", ".pyi": "Python", ".pyw": "Python",
    ".js": "JavaScript", ".jsx": "JavaScript", ".mjs": "JavaScript", ".cjs": "JavaScript",
    ".ts": "TypeScript", ".tsx": "TypeScript", ".mts": "TypeScript", ".cts": "TypeScript",
    ".go": "Go",
    ".rs": "Rust",
    ".java": "Java",
    ".kt": "Kotlin", ".kts": "Kotlin",
    ".scala": "Scala", ".sc": "Scala",
    ".groovy": "Groovy", ".gradle": "Groovy",
    ".rb": "Ruby", ".rake": "Ruby",
    ".php": "PHP",
    ".c": "C", ".h": "C",
    ".cpp": "C++", ".cc": "C++", ".cxx": "C++", ".hpp": "C++", ".hh": "C++", ".hxx": "C++",
    ".cs": "C#",
    ".fs": "F#", ".fsx": "F#",
    ".swift": "Swift",
    ".m": "Objective-C", ".mm": "Objective-C++",
    ".dart": "Dart",
    ".lua": "Lua",
    ".pl": "Perl", ".pm": "Perl",
    ".r": "R",
    ".jl": "Julia",
    ".hs": "Haskell",
    ".ex": "Elixir", ".exs": "Elixir",
    ".erl": "Erlang",
    ".clj": "Clojure", ".cljs": "Clojure",
    ".elm": "Elm",
    ".ml": "OCaml", ".mli": "OCaml",
    ".zig": "Zig",
    ".vue": "Vue",
    ".svelte": "Svelte",
    ".html": "HTML", ".htm": "HTML",
    ".css": "CSS",
    ".scss": "SCSS", ".sass": "Sass",
    ".less": "Less",
    ".sql": "SQL",
    ".sh": "Shell", ".bash": "Shell", ".zsh": "Shell",
    ".ps1": "PowerShell",
    ".tf": "HCL", ".hcl": "HCL",
    ".yaml": "YAML", ".yml": "YAML",
    ".json": "JSON",
    ".toml": "TOML",
    ".xml": "XML",
    ".md": "Markdown", ".markdown": "Markdown",
    ".proto": "Protocol Buffers",
    ".graphql": "GraphQL", ".gql": "GraphQL",
    ".sol": "Solidity",
}

# Files identified by their full basename
_FILENAME_TO_LANG: Dict[str, str] = {
    "dockerfile": "Dockerfile",
    "makefile": "Makefile",
    "gnumakefile": "Makefile",
    "cmakelists.txt": "CMake",
    "gemfile": "Ruby",
    "rakefile": "Ruby",
    "jenkinsfile": "Groovy",
    "vagrantfile": "Ruby",
}


class LanguageDetector:
    """Maps a filename to a language label, or None when unknown."""

    def detect(self, filename: str) -> Optional[str]:
        path = PurePosixPath(filename)
        name = path.name.lower()

        if name in _FILENAME_TO_LANG:
            return _FILENAME_TO_LANG[name]
        if name.startswith("dockerfile."):
            return "Dockerfile"

        return _EXT_TO_LANG.get(path.suffix.lower())
