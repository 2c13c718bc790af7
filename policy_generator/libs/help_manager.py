"""
Help Manager

Loads help and example text shipped with the generator.
"""

from pathlib import Path
from typing import Optional


class HelpManager:
    """Manages help text and documentation"""

    def __init__(self):
        self.help_dir = Path(__file__).parent.parent / "help"

    def get_help(self, topic: str) -> str:
        """Get help text for a topic"""
        # Convert dashes to underscores for file names
        topic_file = topic.replace('-', '_')
        help_file = self.help_dir / f"{topic_file}_help.txt"

        if help_file.exists():
            with open(help_file, 'r') as f:
                return f.read()
        else:
            return f"No help available for: {topic}"

    def get_main_help(self) -> str:
        """Get main help text"""
        return self.get_help("main")

    def get_examples(self) -> str:
        """Get examples help text"""
        return self.get_help("examples")

    def show_help(self, topic: Optional[str] = None) -> None:
        """Show help for a topic or main help if none specified"""
        if topic is None:
            print(self.get_main_help())
        else:
            print(self.get_help(topic))

    def show_examples(self) -> None:
        """Show examples help"""
        print(self.get_examples())
