"""Constants for the GitHub service."""

API_VERSION = "2022-11-28"

# Standard GitHub language colors (subset of most common)
# Used to decorate the language breakdown in snapshot responses
GITHUB_LANGUAGE_COLORS: dict[str, str] = {
    "Python": "#3572A5",
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Java": "#b07219",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#178600",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "Ruby": "#701516",
    "PHP": "#4F5D95",
    "Swift": "#F05138",
    "Kotlin": "#A97BFF",
    "Scala": "#c22d40",
    "Shell": "#89e051",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "SCSS": "#c6538c",
    "Vue": "#41b883",
    "Svelte": "#ff3e00",
    "Dockerfile": "#384d54",
    "Makefile": "#427819",
    "Jupyter Notebook": "#DA5B0B",
    "Dart": "#00B4AB",
    "Lua": "#000080",
    "Haskell": "#5e5086",
    "Elixir": "#6e4a7e",
}

DEFAULT_LANGUAGE_COLOR = "#8b8b8b"

# Daily contribution counts for a window of at most one year.
# contributionsCollection rejects ranges longer than one year.
CONTRIBUTION_CALENDAR_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      contributionCalendar {
        totalContributions
        weeks {
          contributionDays {
            date
            contributionCount
          }
        }
      }
    }
  }
}
"""


def language_color(name: str) -> str:
    """Hex color used to render a language in the breakdown."""
    return GITHUB_LANGUAGE_COLORS.get(name, DEFAULT_LANGUAGE_COLOR)
