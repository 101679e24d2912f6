"""
Outline Prompt - Chapters, pages, layouts and scenes
"""

OUTLINE_PROMPT_TEMPLATE = """Create story structure for: {prompt}

MAIN CHARACTERS (use these IDs):
{characters_description}

REQUIREMENTS:
- Exactly {chapter_count} chapter(s)
- EXACTLY {page_count} total pages
- Each page needs a scene with location, weather, timeOfDay, atmosphere
- Make each page summary SPECIFIC and UNIQUE - avoid generic descriptions

AVAILABLE LAYOUTS (choose based on panel dimensions):
- 'single': 1 large panel - full-page splash, establishing shots, dramatic moments
- 'two-horizontal': 2 wide panels stacked - dialogue exchanges, before/after, parallel events
- 'two-vertical': 2 tall columns side by side - vertical action, tall characters, parallel POVs
- 'three-rows': 3 horizontal strips - sequential action, time progression, montage
- 'grid-2x2': 4 equal panels - conversations, multi-angle shots, quick sequence
- 'big-left': 1 large left + 2 smaller right - main action with reactions
- 'big-right': 2 smaller left + 1 large right - build-up to reveal
- 'big-top': 1 wide top + 2 smaller bottom - establishing + details
- 'big-bottom': 2 smaller top + 1 wide bottom - details leading to climax
- 'strip-3': 3 tall vertical columns - vertical movement, tall scenes, manga style
- 'manga-3': 1 top + 2 bottom columns - intro + dual reactions
- 'action': 1 large left + 2 stacked right - dynamic action sequences

IMPORTANT - charactersInScene:
- List ONLY characters who ACTUALLY APPEAR in this scene
- Use main character IDs (char-1, char-2, etc.) for main characters
- For EPISODIC/BACKGROUND characters NOT in the main list, use descriptive IDs like:
  - "anon-editor" (newspaper editor)
  - "anon-soldier" (random soldier)
  - "anon-crowd" (background crowd)
- If scene has ONLY anonymous characters, don't force main characters into it

Return JSON:
{{
  "title": "Comic Title",
  "chapters": [
    {{
      "title": "Chapter Title",
      "pages": [
        {{
          "layout": "layout-name",
          "summary": "SPECIFIC events: who does what, key dialogue moment, emotional beat",
          "charactersInScene": ["char-1", "anon-editor"],
          "scene": {{
            "location": "Normandy beach, France",
            "weather": "overcast, light rain",
            "timeOfDay": "dawn",
            "atmosphere": "tense"
          }}
        }}
      ]
    }}
  ]
}}"""
