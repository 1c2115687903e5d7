"""
Built-in widget types and the configuration fields each of them exposes.
"""

from types import MappingProxyType

CORE_WIDGET_TYPES = (
    ("pages", "Pages", "A list of your site's Pages."),
    ("calendar", "Calendar", "A calendar of your site's Posts."),
    ("archives", "Archives", "A monthly archive of your site's Posts."),
    ("media_audio", "Audio", "Displays an audio player."),
    ("media_image", "Image", "Displays an image."),
    ("media_gallery", "Gallery", "Displays an image gallery."),
    ("media_video", "Video", "Displays a video from the media library or from a video site."),
    ("meta", "Meta", "Login, RSS, & links."),
    ("search", "Search", "A search form for your site."),
    ("text", "Text", "Arbitrary text."),
    ("categories", "Categories", "A list or dropdown of categories."),
    ("recent-posts", "Recent Posts", "Your site's most recent Posts."),
    ("recent-comments", "Recent Comments", "Your site's most recent comments."),
    ("rss", "RSS", "Entries from any RSS or Atom feed."),
    ("tag_cloud", "Tag Cloud", "A cloud of your most used tags."),
    ("nav_menu", "Navigation Menu", "Add a navigation menu to your sidebar."),
    ("custom_html", "Custom HTML", "Arbitrary HTML code."),
)

# Widget types that carry a generic title field
TITLED_WIDGET_TYPES = frozenset((
    "pages", "calendar", "archives", "meta", "search", "text", "categories",
    "recent-posts", "recent-comments", "rss", "tag_cloud", "nav_menu", "next_recent_posts",
))

# Keys follow the historical table; recent_posts and recent_comments do not
# match the registered recent-posts and recent-comments id_bases.
CORE_WIDGET_SCHEMAS = MappingProxyType({
    "archives": MappingProxyType({
        "count": MappingProxyType({"type": "boolean", "default": False}),
        "dropdown": MappingProxyType({"type": "boolean", "default": False}),
    }),
    "calendar": MappingProxyType({}),
    "categories": MappingProxyType({
        "count": MappingProxyType({"type": "boolean", "default": False}),
        "hierarchical": MappingProxyType({"type": "boolean", "default": False}),
        "dropdown": MappingProxyType({"type": "boolean", "default": False}),
    }),
    "meta": MappingProxyType({}),
    "nav_menu": MappingProxyType({
        "sortby": MappingProxyType({"type": "string", "default": "post_title"}),
        "exclude": MappingProxyType({"type": "string", "default": ""}),
    }),
    "pages": MappingProxyType({
        "sortby": MappingProxyType({"type": "string", "default": "post_title"}),
        "exclude": MappingProxyType({"type": "string", "default": ""}),
    }),
    "recent_comments": MappingProxyType({
        "number": MappingProxyType({"type": "integer", "default": 5}),
    }),
    "recent_posts": MappingProxyType({
        "number": MappingProxyType({"type": "integer", "default": 5}),
        "show_date": MappingProxyType({"type": "boolean", "default": False}),
    }),
    "rss": MappingProxyType({
        "url": MappingProxyType({"type": "string", "default": ""}),
        "link": MappingProxyType({"type": "string", "default": ""}),
        "items": MappingProxyType({"type": "integer", "default": 10}),
        "error": MappingProxyType({"type": "string", "default": None}),
        "show_summary": MappingProxyType({"type": "boolean", "default": False}),
        "show_author": MappingProxyType({"type": "boolean", "default": False}),
        "show_date": MappingProxyType({"type": "boolean", "default": False}),
    }),
    "search": MappingProxyType({}),
    "tag_cloud": MappingProxyType({
        "taxonomy": MappingProxyType({"type": "string", "default": "post_tag"}),
    }),
    "text": MappingProxyType({
        "text": MappingProxyType({"type": "string", "default": ""}),
        "filter": MappingProxyType({"type": "boolean", "default": False}),
    }),
})
