# prompts.py
# Templates are filled with str.format, so literal JSON braces are doubled.

DAILY_SUMMARY_PROMPT = """
Yesterday, you completed {habits_completed} out of {total_habits} habits, resulting in a completion rate of {completion_rate}%. Your longest streak is {longest_streak} days.

Provide a single-sentence summary of this information, highlighting the most relevant information to motivate the user.
Focus on positive achievements and potential areas for improvement.

Return ONLY a JSON object:
{{"summary": "<one sentence>"}}
"""

STATS_INSIGHT_PROMPT = """
You are an encouraging and insightful AI habit coach.
The user is tracking {active_habit_count} habits.
Their overall completion trend is: {trend}.
{average_line}{highest_line}{lowest_line}
Based on this, provide a concise (1-2 sentences), actionable, and encouraging insight.
If there's a lowest performing habit, gently suggest focusing on it. If all habits are doing well, celebrate that.
Be positive and motivational.

Return ONLY a JSON object:
{{"insight": "<1-2 sentences>"}}
"""

GAMIFIED_CHALLENGE_PROMPT = """
You are a master game designer AI, specializing in creating motivating and fun "Habit Quests" (gamified challenges) for users trying to build positive habits.

The user is currently tracking these habits:
{habit_lines}

Your task is to design a new Habit Quest. The quest should be:
- Thematic and Engaging: give it a fun theme (e.g., adventurer, explorer, wizard, scientist, athlete).
- Supportive: it should ideally support one or more of the user's existing habits, or introduce a related micro-habit.
- Achievable: the goals should be clear and feel attainable.
- Motivating: make it sound exciting!

Return ONLY a JSON object in this format:
{{
  "challengeTitle": "A short, catchy title (max 10 words)",
  "challengeDescription": "A brief, engaging description of the quest and its rules (2-3 sentences)",
  "durationDays": 7,
  "rewardSuggestion": "A fun, non-monetary reward suggestion (max 15 words)"
}}

Make sure durationDays is one of 7, 14, 21 or 30.
The theme should be subtle and integrated into the title and description.
If no habits are provided, create a general well-being quest.
"""

NATURAL_LANGUAGE_HABIT_PROMPT = """
You are a helpful assistant that converts natural language sentences into structured habit definitions.

Given the following sentence: {sentence}

Extract the following information and return ONLY a JSON object:
- name: A short, descriptive name for the habit.
- description: A brief explanation of the habit.
- frequency: How often the habit should be performed (e.g., daily, weekly, specific days).
- time: The time of day for the habit, if specified (omit otherwise).

Example:
Sentence: "Run 3 km Tue/Thu"
Output:
{{"name": "Run 3 km", "description": "Run 3 kilometers every Tuesday and Thursday", "frequency": "Tue/Thu"}}
"""

RECOMMEND_STRATEGIES_PROMPT = """
You are an AI assistant designed to provide personalized recommendations for improving habit consistency.

Analyze the user's habit progress data and goals, and suggest strategies to help them improve.

Habit Name: {habit_name}
Progress Data: {progress_data}
User Goals: {user_goals}

Based on this information, provide a list of personalized strategies that the user can implement to improve their consistency and achieve their goals.

Return ONLY a JSON object:
{{"recommendations": ["<strategy 1>", "<strategy 2>", "..."]}}
"""
