from langchain_core.prompts import PromptTemplate


INTENT_ANALYSIS_PROMPT = PromptTemplate.from_template(
"""
You are an expert intent analyzer for a Reya Network DEX assistant. Analyze the user's message and determine their intent.

USER MESSAGE: "{message}"

AVAILABLE INTENT TYPES:

1. KNOWLEDGE_QUERY - User wants explanations, definitions, concepts, how things work
   Examples: "что такое rUSD?", "как работает cross-margining?", "explain perpetual futures"

2. PRICE_QUERY - User wants current/live price data for specific assets
   Examples: "цена BTC", "current ETH price", "сколько стоит SOL"

3. MARKET_QUERY - User wants market information, trading data, volumes, etc.
   Examples: "какие рынки доступны?", "show me markets", "trading volume"

4. ASSET_QUERY - User wants information about supported assets/tokens
   Examples: "какие активы поддерживаются?", "list all assets", "supported tokens"

5. HISTORICAL_DATA_QUERY - User wants past data, charts, trends
   Examples: "график за неделю", "price history", "24h change"

6. COMPARISON_QUERY - User wants to compare multiple assets/markets
   Examples: "сравни BTC и ETH", "compare markets", "which is better"

7. GENERAL_CHAT - General conversation, greetings, unrelated topics
   Examples: "hello", "привет", "how are you", "thanks"

ANALYSIS RULES:
- "что такое", "what is", "explain", "как работает" → KNOWLEDGE_QUERY
- "цена", "price", "стоимость", "сколько стоит" → PRICE_QUERY
- "рынки", "markets", "торги" → MARKET_QUERY
- "активы", "assets", "токены" → ASSET_QUERY
- "график", "chart", "история" → HISTORICAL_DATA_QUERY
- "сравни", "compare", "vs" → COMPARISON_QUERY
- Otherwise → GENERAL_CHAT

Respond with JSON only, in this format:
{{
  "intent": "INTENT_TYPE",
  "confidence": 0.95,
  "reasoning": "Brief explanation of why this intent was chosen",
  "extractedEntities": {{
    "assets": ["BTC", "ETH"],
    "timeframe": "24h",
    "queryType": "price"
  }}
}}
"""
)


SYMBOL_EXTRACTION_PROMPT = PromptTemplate.from_template(
"""
You are a cryptocurrency symbol extraction expert. Identify the cryptocurrency symbol mentioned in the user message.

RULES:
1. Look for 2-5 character tickers (BTC, ETH, UNI, SOL, AAVE, ...) in any case
2. Map common names to tickers (Bitcoin → BTC, Ethereum → ETH, Solana → SOL, Uniswap → UNI)
3. If several symbols are mentioned, return the FIRST one
4. If no specific symbol is mentioned, leave symbol empty and use type "general"

EXAMPLES:
- "check UNI price" → symbol: UNI, type: specific
- "what is Bitcoin worth" → symbol: BTC, type: specific
- "цена HYPE" → symbol: HYPE, type: specific
- "show me prices" → symbol: "", type: general

Return ONLY this structure:
<response>
  <symbol>EXTRACTED_SYMBOL_OR_EMPTY</symbol>
  <type>specific_or_general</type>
</response>

USER MESSAGE: "{message}"
"""
)
