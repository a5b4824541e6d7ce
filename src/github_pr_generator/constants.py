"""
Configuration constants for the GitHub PR Generator.

Centralizes the response wire format, branch naming and model defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ResponseFormatConstants:
    """Delimiters and element names of the model's XML payload."""

    OPEN_TAG: str = "<response>"
    CLOSE_TAG: str = "</response>"

    ROOT: str = "response"
    PULL_REQUEST: str = "pullRequest"
    TITLE: str = "title"
    BODY: str = "body"
    FILES: str = "files"
    FILE: str = "file"
    PATH: str = "path"
    CONTENT: str = "content"


@dataclass(frozen=True)
class ReasoningConstants:
    """How reasoning is marked in model output."""

    # Models that reason inline wrap it in <think>...</think>
    TAG_NAME: str = "think"

    # Content part types used by providers that return thoughts separately
    PART_TYPES: tuple = ("thinking", "reasoning")


@dataclass(frozen=True)
class BranchConstants:
    """Constants for feature branch naming."""

    DEFAULT_PREFIX: str = "feature/"
    SEPARATOR: str = "-"


@dataclass(frozen=True)
class LLMConstants:
    """Defaults for the chat model."""

    DEFAULT_MODEL: str = "gemini-2.5-flash"
    DEFAULT_TEMPERATURE: float = 0.1


# Create singleton instances
RESPONSE_FORMAT = ResponseFormatConstants()
REASONING = ReasoningConstants()
BRANCH = BranchConstants()
LLM = LLMConstants()


COMMIT_MESSAGE_TEMPLATE = "Update {path}"

REVIEW_COMMENT_TEMPLATE = """## AI Model's Reasoning Process

{reasoning}

## Modified Files
{modified_files}"""

REQUIREMENT_PROMPT = """Describe your feature request or code changes. You can specify:
1. New features/functionality
2. Code modifications
3. Bug fixes
4. Performance improvements
5. Tests/documentation
6. Specific files to modify

Your requirements: """

SYSTEM_INSTRUCTIONS = """You are a senior software engineer. Analyze the following codebase and generate changes based on user requirements.
Respond ONLY with valid XML in this format:
<response>
  <pullRequest>
    <title>Title of the pull request</title>
    <body>Detailed description of the changes</body>
  </pullRequest>
  <files>
    <file>
      <path>path/to/file</path>
      <content>File content</content>
    </file>
  </files>
</response>

Rules:
- Each <content> element holds the complete final content of the file, not a diff
- Repeat the <file> element once for every file you create or modify
- Escape XML special characters in text (&amp; &lt; &gt;) or wrap content in CDATA

Current codebase:
{codebase_context}"""
