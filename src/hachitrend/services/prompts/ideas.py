"""Idea, channel analysis, script and thumbnail prompt templates."""

# Template placeholders: {title}, {description}, {idea_count}
VIDEO_IDEAS_V1 = """Based on the YouTube trend/topic: "{title}"
Context: {description}

Generate {idea_count} distinct, viral-worthy video ideas that capitalize on this trend.
Focus on high CTR (Click-Through Rate) titles and engaging hooks.

Also generate 5-10 high-traffic SEO tags (keywords) for each video idea."""

# Template placeholders: {channel_name}
CHANNEL_ANALYZER_V1 = """Search for the YouTube channel '{channel_name}'.
Use Google Search to find their recent videos, most popular content, and overall style.

Based on your analysis:
1. Identify the correct channel name.
2. Write a 2-sentence summary of their content strategy and niche.
3. Estimate their subscriber count if available in search snippets (e.g., "1.2M", "500K").
4. Generate 5 new video ideas that perfectly fit their style but offer a fresh angle.
5. Include 5-8 relevant tags for each idea.

Return the result as a single JSON object with the keys "channelName", "summary",
"subscriberCountEstimate" and "ideas". Each idea has "title", "hook", "thumbnailDescription",
"targetAudience", "estimatedEffort" (Low, Medium or High) and "tags"."""

# Template placeholders: {title}, {target_audience}, {hook}
SCRIPT_WRITER_V1 = """Write a complete YouTube video script for the following idea:
Title: {title}
Target Audience: {target_audience}
Hook: {hook}

The output should be in JSON format with the following fields:
- title: The final polished title.
- outline: A bulleted list of the video structure (Intro, Points, Outro).
- fullScript: The actual spoken script formatted in Markdown, including cues for visuals [Visual Cue]."""

# Template placeholders: {description}
THUMBNAIL_GENERATOR_V1 = (
    "Generate a high-quality, vibrant YouTube thumbnail image based on this description: "
    "{description}. Make it colorful, high contrast, and clickable. No text overlay."
)
