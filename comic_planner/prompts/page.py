"""
Page Prompts - Per-page thinking and per-slot panel writing
The thinking output is handed to every panel call of the same page so that
panels written concurrently still divide the page between them.
"""

PAGE_THINKING_PROMPT_TEMPLATE = """You are a comic book director. Before creating panels, THINK about this page.

STORY: {prompt}

FULL STORY STRUCTURE (all pages):
{all_summaries}

YOU ARE WORKING ON PAGE {page_number}: {page_summary}

PANEL COUNT: {panel_count}
{main_characters}
{anonymous_characters}

IMPORTANT: Only use characters listed above. Do NOT add other main characters.

Think in context of a {language_name} comic.

Analyze and return your thinking:
{{
  "storyBeats": ["beat 1", "beat 2"],
  "emotionalArc": "Description of emotional journey on this page",
  "keyMoments": ["moment 1", "moment 2"],
  "panelBreakdown": [
    {{
      "panelNumber": 1,
      "purpose": "Why this panel exists, what it shows",
      "suggestedShot": "wide/medium/close-up/etc",
      "suggestedAngle": "eye-level/low-angle/etc"
    }}
  ]
}}"""

PANEL_PROMPT_TEMPLATE = """Generate panel {position} of {panel_count} for a comic page.

PAGE NUMBER: {page_number}
STORY: {prompt}
VISUAL STYLE: {visual_style}
SETTING: {world_setting}
PAGE SUMMARY: {page_summary}
SCENE: {scene}

OTHER PANELS ON THIS PAGE (for context, avoid repetition):
{other_panels}

YOUR THINKING FOR THIS PANEL:
- Purpose: {purpose}
- Suggested shot: {suggested_shot}
- Suggested angle: {suggested_angle}
- Emotional arc: {emotional_arc}

{characters_section}

DETAILED CHARACTER APPEARANCES (for imagePrompt):
{appearances}

CRITICAL RULES:
1. Write ALL text in {language_name}. Do not mix languages. This includes action, dialogue, narrative, sfx, gesture, and gazeDirection fields.
2. This panel MUST be UNIQUE - different from all other panels.
3. Action description must be SPECIFIC and VISUAL (what camera sees).
4. Use ONLY valid character IDs from this scene: {valid_ids}
5. Do NOT add characters who are not in this scene.
6. Follow your thinking: use suggested shot "{suggested_shot}" and angle "{suggested_angle}".

IMAGE PROMPT RULES:
7. "imagePrompt" must be in ENGLISH only (even if content is not)
8. Include: camera shot, angle, character appearances, poses, expressions, location, atmosphere, and ALWAYS end with art style
9. Use these style keywords: "{style_keywords}"
10. "negativePrompt" should list things to avoid (blurry, text, speech bubbles, etc.)

{few_shot_example}

SHOT TYPES: extreme-close-up, close-up, medium-close-up, medium, medium-wide, wide, extreme-wide
CAMERA ANGLES: eye-level, low-angle, high-angle, dutch-angle, birds-eye, worms-eye, over-the-shoulder
BUBBLE POSITIONS: top-left, top-right, bottom-left, bottom-right, top-center, bottom-center

Return ONLY the panel JSON (no wrapper object):
{{
  "characters": [...],
  "action": "...",
  "mood": "...",
  "camera": {{ "shot": "...", "angle": "...", "focus": "..." }},
  "dialogue": [...],
  "narrative": "..." or null,
  "sfx": "..." or null,
  "imagePrompt": "detailed rendering prompt in English...",
  "negativePrompt": "blurry, low quality, text, watermark, speech bubbles"
}}"""
