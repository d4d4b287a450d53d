"""Video optimizer prompt templates.

Contains prompts for:
- VIDEO_OPTIMIZER_V1: Critique and rewrite an existing video's metadata
- THUMBNAIL_EDITOR_V1: Instruction wrapper for editing an uploaded thumbnail
"""

# Template placeholders: {title}, {channel_name}, {view_count}, {like_count},
# {comment_count}, {description}, {tags}
VIDEO_OPTIMIZER_V1 = """You are a YouTube SEO and packaging expert.

Analyze this existing video's metadata and suggest improvements that raise click-through
rate and search discoverability without misrepresenting the content.

VIDEO
- Title: {title}
- Channel: {channel_name}
- Views: {view_count}
- Likes: {like_count}
- Comments: {comment_count}
- Tags: {tags}
- Description:
<<<
{description}
>>>

Return a JSON object with:
- "critique": 2-4 sentences on what the current title, description and tags do well and badly.
- "improvedTitles": 3-5 alternative titles (under 70 characters each).
- "improvedDescription": A rewritten description whose first two lines work as a hook, in Markdown.
- "improvedTags": 10-15 tags.
- "thumbnailSuggestions": Concrete visual changes for the thumbnail (one short paragraph)."""

# Template placeholders: {instruction}
THUMBNAIL_EDITOR_V1 = (
    "Edit this YouTube thumbnail. Instruction: {instruction}. "
    "Keep it high contrast and readable at small sizes."
)
