"""
Style Keyword Tables - Visual style, world setting and few-shot panel examples
Keywords are appended to every rendering prompt so panels share one look.
"""

VISUAL_STYLE_PROMPTS = {
    "american-classic": "comic book art, Marvel DC style, bold lines, dynamic poses, vibrant colors, halftone dots",
    "noir": "noir comic art, high contrast black and white, dramatic shadows, Frank Miller style, chiaroscuro lighting",
    "manga": "manga style, Japanese comic art, clean lines, expressive eyes, screentones, dynamic action lines",
    "euro-bd": "European bande dessinee style, Tintin Moebius inspired, clean ligne claire, detailed backgrounds",
    "watercolor": "watercolor painting style, soft edges, flowing colors, painterly comic art, artistic washes",
    "retro": "vintage 1950s comic art, retro illustration, classic Americana, warm nostalgic colors",
    "cyberpunk": "cyberpunk art style, neon lights, sci-fi, futuristic, high tech low life, glowing elements",
    "whimsical": "children book illustration, whimsical art, soft colors, friendly characters, storybook style",
    "horror": "horror comic art, dark fantasy, gothic illustration, eerie atmosphere, creepy details",
    "minimalist": "minimalist comic art, simple lines, limited palette, modern clean design, negative space",
    "ukiyo-e": "ukiyo-e style, Japanese woodblock print, flat colors, bold outlines, traditional art",
    "pop-art": "pop art style, Lichtenstein inspired, Ben-Day dots, bold primary colors, comic book aesthetic",
    "sketch": "pencil sketch style, storyboard art, rough lines, crosshatching, hand-drawn look",
    "cel-shaded": "cel-shaded art, Borderlands Spider-Verse style, bold outlines, flat shading, 3D comic look",
    "pulp": "1930s pulp fiction art, vintage adventure illustration, dramatic lighting, action packed",
    "woodcut": "woodcut print style, medieval illustration, bold black lines, textured, handcrafted look",
    "art-nouveau": "art nouveau style, Alphonse Mucha inspired, decorative borders, flowing organic lines",
    "graffiti": "street art style, graffiti, spray paint aesthetic, urban, bold colors, edgy",
    "chibi": "chibi style, super-deformed cute characters, big heads, small bodies, kawaii",
    "soviet-poster": "Soviet propaganda poster style, bold red and black, constructivist, heroic poses",
}

DEFAULT_VISUAL_STYLE_PROMPT = "comic book art style"

SETTING_PROMPTS = {
    "realistic": "realistic setting, contemporary, grounded in reality",
    "sci-fi": "science fiction, futuristic technology, space, advanced civilization",
    "cyberpunk": "cyberpunk setting, dystopian future, neon, cybernetic implants, megacities",
    "fantasy": "fantasy setting, magic, medieval, mythical creatures, enchanted",
    "steampunk": "steampunk setting, Victorian era, brass gears, steam-powered machinery",
    "supernatural": "supernatural setting, ghosts, vampires, demons, paranormal",
    "post-apocalyptic": "post-apocalyptic setting, wasteland, ruins, survival, desolation",
}

LANGUAGE_NAMES = {
    "uk": "Ukrainian",
    "en": "English",
}

FEW_SHOT_PANEL_EXAMPLE_UK = """
ПРИКЛАД ЯКІСНОЇ ПАНЕЛІ:
{
  "characters": [
    {
      "characterId": "char-1",
      "expression": "determined",
      "pose": "crouching",
      "gesture": "тримає рацію біля вуха",
      "gazeDirection": "на горизонт"
    }
  ],
  "action": "Сержант притискається до землі за укриттям, слухаючи потріскування рації",
  "mood": "напружений",
  "camera": {"shot": "medium-close-up", "angle": "low-angle", "focus": "char-1"},
  "dialogue": [
    {"characterId": "char-1", "text": "Друга рота, відповідайте!", "bubblePosition": "top-right"}
  ],
  "narrative": "Зв'язок обірвався три хвилини тому.",
  "sfx": "КРРРР...",
  "imagePrompt": "medium-close-up low-angle shot, determined soldier crouching behind cover holding radio to ear, olive skin short black hair slicked back, military uniform, battlefield dawn smoke debris, tense atmosphere, noir comic art high contrast dramatic shadows",
  "negativePrompt": "blurry, low quality, text, watermark, speech bubbles"
}"""

FEW_SHOT_PANEL_EXAMPLE_EN = """
EXAMPLE OF QUALITY PANEL:
{
  "characters": [
    {
      "characterId": "char-1",
      "expression": "determined",
      "pose": "crouching",
      "gesture": "holding radio to ear",
      "gazeDirection": "at the horizon"
    }
  ],
  "action": "The sergeant presses himself to the ground behind cover, listening to the crackling radio",
  "mood": "tense",
  "camera": {"shot": "medium-close-up", "angle": "low-angle", "focus": "char-1"},
  "dialogue": [
    {"characterId": "char-1", "text": "Second company, respond!", "bubblePosition": "top-right"}
  ],
  "narrative": "The connection broke three minutes ago.",
  "sfx": "CRACKLE...",
  "imagePrompt": "medium-close-up low-angle shot, determined soldier crouching behind cover holding radio to ear, olive skin short black hair slicked back, military uniform, battlefield dawn smoke debris, tense atmosphere, noir comic art high contrast dramatic shadows",
  "negativePrompt": "blurry, low quality, text, watermark, speech bubbles"
}"""


def visual_style_keywords(visual: str) -> str:
    return VISUAL_STYLE_PROMPTS.get(visual, DEFAULT_VISUAL_STYLE_PROMPT)


def setting_keywords(setting: str) -> str:
    return SETTING_PROMPTS.get(setting, "")


def language_name(language: str) -> str:
    return LANGUAGE_NAMES.get(language, "English")


def few_shot_panel_example(language: str) -> str:
    return FEW_SHOT_PANEL_EXAMPLE_UK if language == "uk" else FEW_SHOT_PANEL_EXAMPLE_EN
