PROMPT_EXTRACT_WORDS = (
    "從這張圖片中，請列出最主要的英文單字，並提供它們的中文翻譯。"
    "請以 JSON 陣列的形式回應，每個物件包含 'englishWord' 和 'chineseTranslation' 欄位。"
    '例如：[{ "englishWord": "example", "chineseTranslation": "範例" }]'
)

# Constrains the model output to a JSON array of word objects
RESPONSE_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "englishWord": {"type": "STRING"},
            "chineseTranslation": {"type": "STRING"},
        },
        "propertyOrdering": ["englishWord", "chineseTranslation"],
    },
}
