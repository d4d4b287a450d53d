"""Trend discovery prompt templates.

Contains prompts for:
- TREND_CLUSTERER_V2: Cluster real YouTube video data into macro trends
- TREND_SEARCH_V1: Discover trends with Google Search grounding (no YouTube data)
"""

# Trend Clusterer v2 prompt
# Template placeholders: {video_count}, {subject}, {video_data}, {trend_count}
TREND_CLUSTERER_V2 = """I have a list of {video_count} currently popular YouTube videos related to {subject}.

Raw Video Data:
{video_data}

YOUR TASK:
Analyze this data to identify **{trend_count} DISTINCT MACRO TRENDS or TOPICS**.
Do NOT simply list the video titles. You must cluster similar videos together and identify
the underlying subject matter or format that is trending.

Example:
- If you see videos "I played GTA 6", "GTA 6 Trailer Reaction", and "GTA 6 Leaks", the Trend
  Title should be "GTA 6 Hype" or "GTA 6 Leaks Analysis", NOT just one of the video titles.

Output Requirements for each Trend:
1. "title": The abstract name of the trend/topic (2-5 words).
2. "description": Explain the *pattern* you see. Why is this topic exploding? What are creators doing with it?
3. "relevanceScore": A score (80-100) based on the aggregate view counts of videos in this cluster.
4. "searchQuery": A generic search query to find more content on this specific topic.
5. "sources": An array of objects {{"title": "Video Title", "uri": "https://youtube.com/watch?v=ID"}}
   containing the top 1-3 videos from the raw data that best exemplify this trend.
6. "stats": An object with averages over the videos in this cluster, formatted as short strings
   ("1.2M", "45K", "3.4%"): "averageViews", "averageLikes", "averageComments", "engagementRate",
   "averageSubscriberCount", "averageChannelViews".
7. "intensity": An array of exactly 7 integers (0-100) estimating the trend's momentum over the
   last 7 days, oldest first.
8. "videoCount": How many videos from the raw data belong to this cluster.
9. "trendNature": One of "Big Creator Dominated" (average subscribers above 1,000,000),
   "Viral Opportunity" (average subscribers below 200,000) or "Mixed" (anything in between).

Return a JSON array of these {trend_count} Trend objects and nothing else."""

# Trend Search v1 prompt (Google Search grounding)
# Template placeholders: {context}, {trend_count}
TREND_SEARCH_V1 = """Identify {trend_count} currently exploding **TOPICS** or **VIRAL CONCEPTS** on YouTube {context}
Use Google Search to find real-time, up-to-date information for today.

CRITICAL: Do not just return a specific video title. Return the *Topic* that is trending.

For each trend found, provide:
1. A catchy title for the trend (e.g., "The '100 Layers' Challenge" or "AI Voice Covers").
2. A brief description of why it is trending right now and what makes it viral.
3. A relevance score (1-100) based on popularity.
4. A generic search query to find these videos on YouTube.

Return the data as a clean JSON array of objects and nothing else.
The JSON structure should be:
[
  {{"id": "1", "title": "...", "description": "...", "relevanceScore": 85, "searchQuery": "..."}}
]"""
