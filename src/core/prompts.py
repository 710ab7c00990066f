suggestion_prompt_instruction = """Using the trip details provided, write a prompt that will produce the best possible travel plan for this trip.
Respond in JSON using the format {{"prompt": "<prompt text>"}}."""

suggestion_trip_details = """
[Destination] {destination}
[Purpose] {purpose}
[People] {people_count}
[Start date] {start_date}
[End date] {end_date}"""

suggestion_instruction = """Follow the prompt, but answer in plain text (no markdown or rich text) within {max_chars} characters."""

budget_estimate_instruction = """You are a travel cost estimation expert. Based on the given travel plan, estimate the trip budget in {currency}, using numbers only.
Respond in JSON using the format {{"min_budget": "<minimum budget>", "max_budget": "<maximum budget>"}}."""
