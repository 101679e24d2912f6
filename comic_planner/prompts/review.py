"""
Review and Repair Prompts
The reviewer sees one summary line per panel; the repairer rewrites one panel.
"""

REVIEW_PROMPT_TEMPLATE = """Review these comic panels for quality issues.

LANGUAGE REQUIREMENT: All text must be in {language_name}.
MAIN CHARACTER IDs: {main_ids}
(Anonymous characters use page-scoped IDs like anon-editor, anon-soldier, etc.)

PANELS (format: panelId (allowed characters): action | chars: used | dialogue):
{panels_summary}

Find issues:
1. REPETITION: Similar actions or dialogue across panels
2. LANGUAGE: Text not in {language_name} or mixed languages
3. CONTINUITY: Story doesn't flow logically
4. CHARACTER: Invalid character IDs
5. SCENE-MISMATCH: Panel uses characters NOT in the "allowed" list for that page

Return JSON:
{{
  "issues": [
    {{
      "panelId": "ch1-p1-pan1",
      "type": "repetition" | "language" | "continuity" | "character" | "scene-mismatch" | "other",
      "description": "What's wrong",
      "fix": "How to fix it"
    }}
  ],
  "overallQuality": "good" | "needs_fixes" | "poor"
}}

If no issues found, return empty issues array with "good" quality."""

REPAIR_PROMPT_TEMPLATE = """Fix this comic panel based on review feedback.

PANEL ID: {panel_id}

CURRENT PANEL:
{panel_json}

SCENE: {scene}

ISSUES TO FIX:
{issues}

CHARACTERS ALLOWED ON THIS PAGE (use ONLY these IDs: {valid_ids}):
{roster}

CRITICAL RULES:
1. ALL text (action, dialogue, narrative, sfx, gesture, gazeDirection) MUST be in {language_name}
2. Keep the same panel position and general idea
3. Fix ONLY the issues mentioned above
4. Use ONLY valid character IDs: {valid_ids}

{few_shot_example}

Return the FIXED panel JSON:"""
