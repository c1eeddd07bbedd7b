"""LLM prompt templates for the classification oracle."""

# Common instruction to suppress thinking and ensure JSON-only output
# Note: curly braces must be escaped as {{ }} for LangChain templates
JSON_ONLY_INSTRUCTION = """
CRITICAL: You MUST respond with ONLY a valid JSON value.
- Do NOT include any thinking, reasoning, or explanation.
- Do NOT use markdown code blocks.
- No text before or after the JSON."""

CLASSIFICATION_SYSTEM_PROMPT = """You are an expert at analyzing AI conversations and extracting key insights. Your task is to:
1. Identify and categorize important highlights
2. Provide confidence scores for each highlight
3. Extract key topics, action items, resources, and questions
4. Suggest relevant tags for each highlight

HIGHLIGHT CATEGORIES:
- code: source code, commands, configuration snippets
- insight: explanations, recommendations, key learnings
- action_item: tasks or next steps someone should do
- resource: links, references, documentation, tools
- question: important questions raised in the conversation
- other: anything notable that fits none of the above

RULES:
1. "content" MUST be copied verbatim from the message it comes from
2. "messageIndex" is the number shown in parentheses before each message
3. "startChar"/"endChar" are character offsets of the content inside that message
4. Confidence scores are between 0.0 and 1.0
""" + JSON_ONLY_INSTRUCTION

CLASSIFICATION_USER_PROMPT = """Analyze this AI conversation and extract key highlights:

CONVERSATION:
{transcript}

SOURCE: {source}
CATEGORY: {category}

Respond with ONLY this JSON structure (no other text):
{{
  "highlights": [
    {{
      "content": "exact text from conversation",
      "category": "code|insight|action_item|resource|question|other",
      "confidence_score": 0.95,
      "tags": ["tag1", "tag2"],
      "notes": "brief explanation",
      "position": {{
        "messageIndex": 0,
        "startChar": 0,
        "endChar": 50
      }}
    }}
  ],
  "summary": "brief summary of the conversation",
  "key_topics": ["topic1", "topic2"],
  "action_items": ["action1", "action2"],
  "resources": ["resource1", "resource2"],
  "questions": ["question1", "question2"]
}}

Focus on:
- Code snippets and technical details
- Actionable insights and recommendations
- Resources, links, and references
- Important questions and their answers
- Key learnings and takeaways"""

ENHANCEMENT_SYSTEM_PROMPT = """You are an expert at analyzing and enhancing conversation highlights. Provide clear, actionable improvements.

For each highlight, suggest:
1. Better categorization if needed (code|insight|action_item|resource|question|other)
2. Additional relevant tags
3. Brief notes explaining the importance
4. An adjusted confidence score if needed

Keep the highlights in the same order and keep their "index" values unchanged.
""" + JSON_ONLY_INSTRUCTION

ENHANCEMENT_USER_PROMPT = """Review and enhance these conversation highlights.

CONVERSATION: {title} ({source})

HIGHLIGHTS:
{highlights}

Respond with ONLY this JSON structure (no other text):
{{
  "highlights": [
    {{
      "index": 0,
      "category": "code|insight|action_item|resource|question|other",
      "tags": ["tag1", "tag2"],
      "notes": "why this highlight matters",
      "confidence_score": 0.9
    }}
  ]
}}"""
