"""
Prompt templates for itinerary generation.

The output-shape section and tag vocabularies are part of the contract
with the generation service and must stay identical across providers.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


PLANNER_PROMPT_TEMPLATE = """
Role: You are 'JourneyX Pro', an expert local travel planner.
Language: **MUST BE Traditional Chinese (繁體中文 - Taiwan usage)**.

Task: Plan a trip to {destination} for {start_date} to {end_date}.
Members: {members}.
Must Visit: {must_visit}.
Accommodation: {accommodation}.
Preferences: {preferences}.
{adjustment_section}
Requirements:
1. **Hyper-Localization**: Recommend local gems, verify restaurants.
2. **Logistics**: Calculate best transport. Mention specific subway exits.
3. **Pacing**: Include rest breaks.
4. **Coordinates**: MUST provide accurate Lat/Lng for every location.
5. **Rain Plan**: Provide indoor alternatives.
6. **Budget**: Estimate costs in local currency or TWD.
7. **Visual Vibe**: Analyze the destination and choose one style: 'modern' (City/Tech), 'historical' (Culture/Old), 'nature' (Mountains/Forest), or 'tropical' (Beach/Island).

Output Format:
You MUST return a strictly valid JSON object.
Do not wrap it in markdown code blocks.
Just return the raw JSON string.

The JSON must match this structure exactly:
{output_shape}
"""

OUTPUT_SHAPE = """{
  "tripTitle": "Creative Trip Title in Traditional Chinese",
  "destination": "Destination Name",
  "duration": "e.g., 5天4夜",
  "totalBudgetEstimate": "Total Budget Estimate",
  "visualVibe": "modern" | "historical" | "nature" | "tropical",
  "generalTips": ["Tip 1", "Tip 2", "Tip 3"],
  "days": [
    {
      "day": 1,
      "date": "YYYY-MM-DD",
      "theme": "Day Theme",
      "summary": "Day Summary",
      "activities": [
        {
          "time": "HH:MM",
          "title": "Activity Name",
          "description": "Details",
          "type": "sightseeing" | "food" | "transport" | "shopping" | "rest" | "other",
          "transportDetail": "Transport info",
          "cost": "Cost estimate",
          "localTip": "Expert tip",
          "duration": "Duration",
          "bookingRequired": boolean,
          "rainPlan": "Rain backup",
          "location": {
            "lat": number,
            "lng": number,
            "name": "Location Name",
            "address": "Address"
          }
        }
      ]
    }
  ]
}"""

ADJUSTMENT_SECTION_TEMPLATE = """
Previous Feedback:
The traveller reviewed an earlier version of this itinerary and asked for the
following changes. Keep everything else consistent with the request above.
{feedback}
"""


class PlannerPromptConfig(BaseModel):
    """
    Inputs needed to render the planning prompt.

    Mirrors TripRequest with dates already rendered, plus optional
    adjustment feedback.
    """

    destination: str = Field(description="Trip destination")
    start_date: date = Field(description="Trip start date")
    end_date: date = Field(description="Trip end date")
    members: str = Field(default="", description="Who is travelling")
    must_visit: str = Field(default="", description="Must-visit list")
    accommodation: str = Field(default="", description="Where the party stays")
    preferences: str = Field(default="", description="Free-text preferences")
    adjustments: Optional[str] = Field(
        default=None, description="Feedback on a previous itinerary"
    )

    def format_adjustment_section(self) -> str:
        """Render the feedback section, or nothing for a fresh plan."""
        if not self.adjustments or not self.adjustments.strip():
            return ""
        return ADJUSTMENT_SECTION_TEMPLATE.format(feedback=self.adjustments.strip())

    def render(self) -> str:
        return PLANNER_PROMPT_TEMPLATE.format(
            destination=self.destination,
            start_date=self.start_date.isoformat(),
            end_date=self.end_date.isoformat(),
            members=self.members,
            must_visit=self.must_visit,
            accommodation=self.accommodation,
            preferences=self.preferences,
            adjustment_section=self.format_adjustment_section(),
            output_shape=OUTPUT_SHAPE,
        )
