"""Prompt templates for itinerary generation"""

SYSTEM_PROMPT = "You are a professional travel planner. Always return valid JSON only."

ITINERARY_JSON_FORMAT = """{
  "itinerary": [
    {
      "day": 1,
      "theme": "Arrival and City Introduction",
      "activities": [
        {
          "time": "Morning",
          "description": "Specific activity with practical details",
          "location": "Exact location name"
        },
        {
          "time": "Afternoon",
          "description": "Specific activity with practical details",
          "location": "Exact location name"
        },
        {
          "time": "Evening",
          "description": "Specific activity with practical details",
          "location": "Exact location name"
        }
      ]
    }
  ]
}"""


def build_itinerary_prompt(destination: str, duration_days: int) -> str:
    """
    Build the user prompt asking for a day-by-day itinerary as JSON

    Args:
        destination: Trip destination (e.g., "Paris, France")
        duration_days: Number of days to plan

    Returns:
        Prompt text (deterministic for the same inputs)
    """
    return f"""You are a professional travel planner. Create a detailed {duration_days}-day itinerary for {destination}.

REQUIREMENTS:
- Return ONLY valid JSON, no other text and no markdown code fences
- Return exactly {duration_days} days, numbered from 1
- Each day should have a theme and 3 activities (Morning, Afternoon, Evening)
- Activities should be realistic and location-specific
- Include specific location names and practical tips

EXACT JSON FORMAT:
{ITINERARY_JSON_FORMAT}

Destination: {destination}
Duration: {duration_days} days

Return only the JSON object:"""
