from rich.console import Console
from rich.theme import Theme

theme = Theme(
    {
        "file_title": "bold default",
        "good": "bold green",
        "bad": "bold red",
    }
)

main_console = Console(theme=theme, highlight=False, soft_wrap=True)
