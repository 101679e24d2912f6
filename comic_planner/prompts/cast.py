"""
Cast Prompt - Main character roster
The cast is created once; every later stage refers to these characters by id.
"""

CAST_PROMPT_TEMPLATE = """Create 2-5 characters for a comic about: {prompt}

VISUAL STYLE: {visual_style} (art style only)
WORLD SETTING: {world_setting}

Rules for "{world_setting}" setting:
- "realistic": 100% realistic. NO sci-fi, NO fantasy. Historical accuracy required.
- "cyberpunk"/"sci-fi": Futuristic tech allowed.
- "fantasy": Magic allowed.
- "supernatural": Ghosts/vampires allowed.

IMPORTANT: Use ONLY plain text. NO special characters like quotes or double quotes inside values.

Return JSON:
{{
  "characters": [
    {{
      "name": "Full Name",
      "age": 34,
      "gender": "male" | "female" | "other",
      "bodyType": "slim" | "average" | "athletic" | "muscular" | "heavy" | "petite",
      "height": "182 cm" or "tall",
      "face": {{
        "shape": "oval, square, round, heart, oblong",
        "eyes": "deep-set brown eyes with thick eyebrows",
        "nose": "straight Roman nose",
        "mouth": "thin lips, often pressed together",
        "hair": "short black hair, slicked back, graying at temples",
        "distinctiveFeatures": "scar on left cheek, stubble, crow feet"
      }},
      "skinTone": "olive, pale, dark brown, tan, etc.",
      "defaultExpression": {expressions},
      "clothing": "Outfit with colors and details",
      "role": "Role in story"
    }}
  ]
}}"""
