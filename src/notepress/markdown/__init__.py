from notepress.markdown.frontmatter import (
    PUBLISH_FLAG_LINE,
    PUBLISH_FLAG_LITERALS,
    FrontmatterBlock,
    add_publish_flag,
    find_frontmatter,
    is_publishable,
    parse_frontmatter,
)

__all__ = [
    "PUBLISH_FLAG_LINE",
    "PUBLISH_FLAG_LITERALS",
    "FrontmatterBlock",
    "add_publish_flag",
    "find_frontmatter",
    "is_publishable",
    "parse_frontmatter",
]
