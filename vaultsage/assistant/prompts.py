"""Prompt templates for the assistant operations."""

# Categories offered when the vault's own folders are not used
DEFAULT_CATEGORIES = {
    "CAREER": "job search, professional development, work",
    "HEALTH": "fitness, mental health, wellness",
    "JOURNAL": "daily reflections, personal thoughts",
    "BUSINESS": "ventures, ideas, entrepreneurship",
    "FINANCES": "budget, investments, money",
    "KNOWLEDGE": "learning, books, courses",
    "PROJECTS": "active projects, portfolio",
    "VISION": "goals, life planning, future",
}

CATEGORIZE_PROMPT = """You are analyzing personal notes from an Obsidian vault.

Available categories:
{categories}

Based on this note, return ONLY the category name (exactly as listed above):

{content}"""

SUMMARIZE_PROMPT = """You are analyzing {note_count} personal notes from an Obsidian vault folder called "{folder_name}".{sample_note}

Notes:
{notes}

Provide a 200-word summary covering:
- Main themes and recurring topics
- Time period or date range (if mentioned in notes)
- Key insights, patterns, or notable moments
- Overall tone and sentiment
- Any significant trends or changes over time

Write the summary in a narrative style, as if explaining to the note author what their folder contains. Be specific and reference concrete details from the notes.

After the summary, add one final line in this format:
Themes: theme one, theme two, theme three

Summary (200 words):"""

INSIGHTS_PROMPT = """Analyze the usage pattern of the keyword "{keyword}" in personal notes.

Found {match_count} mentions across different notes.
Trend: {trend}

Example snippets:
{snippets}

Provide a 3-sentence insight about:
1. What this keyword reveals about the person's focus/concerns
2. How the usage pattern ({trend}) is significant
3. Any notable patterns in the context of usage

Insight:"""

QA_PROMPT = """You are an intelligent assistant helping to answer questions about a personal knowledge vault (Obsidian notes).

Context from vault:
{context}

Question: {question}

Instructions:
- Answer based ONLY on the provided notes
- Be specific and cite note titles when relevant
- If the answer isn't in the notes, say "I don't have enough information in your vault to answer this."
- Be concise but thorough
- Use a friendly, helpful tone

Answer:"""

FOLDER_SUMMARIES_PROMPT = """You are analyzing a personal knowledge vault (Obsidian notes). Below are representative samples from each folder.

{context}

For each folder, provide a 2-3 sentence thematic summary. What are the main topics and themes?

Format your response as:
FOLDER_NAME: summary here
FOLDER_NAME: summary here
...

Be concise, specific, and insightful."""

THEMES_PROMPT = """You are analyzing a personal knowledge vault. Based on these representative notes, identify the top 5-7 overarching themes across the entire vault.

{context}

List the main themes as a numbered list. Be specific and insightful.

Format:
1. Theme description
2. Theme description
..."""
