"""Daily motivational quote."""

from __future__ import annotations

from datetime import date

from morning_dashboard.models import Quote

QUOTES = [
    Quote("The secret of getting ahead is getting started.", "Mark Twain"),
    Quote("It's not about having time, it's about making time.", "Unknown"),
    Quote("Focus on being productive instead of busy.", "Tim Ferriss"),
    Quote("The way to get started is to quit talking and begin doing.", "Walt Disney"),
    Quote("Don't watch the clock; do what it does. Keep going.", "Sam Levenson"),
    Quote("You don't have to be great to start, but you have to start to be great.", "Zig Ziglar"),
    Quote("The only way to do great work is to love what you do.", "Steve Jobs"),
    Quote("Start where you are. Use what you have. Do what you can.", "Arthur Ashe"),
    Quote("Small daily improvements are the key to staggering long-term results.", "Unknown"),
    Quote(
        "Productivity is never an accident. It is always the result of commitment to excellence.",
        "Paul J. Meyer",
    ),
    Quote("Either you run the day or the day runs you.", "Jim Rohn"),
    Quote("Action is the foundational key to all success.", "Pablo Picasso"),
    Quote(
        "Amateurs sit and wait for inspiration, the rest of us just get up and go to work.",
        "Stephen King",
    ),
    Quote("Your future is created by what you do today, not tomorrow.", "Robert Kiyosaki"),
    Quote(
        "The best time to plant a tree was 20 years ago. The second best time is now.",
        "Chinese Proverb",
    ),
    Quote("Done is better than perfect.", "Sheryl Sandberg"),
    Quote(
        "If you want to make an easy job seem mighty hard, just keep putting off doing it.",
        "Olin Miller",
    ),
    Quote(
        "Eat a live frog first thing in the morning and nothing worse will happen "
        "to you the rest of the day.",
        "Mark Twain",
    ),
    Quote("Until we can manage time, we can manage nothing else.", "Peter Drucker"),
    Quote("Time is what we want most, but what we use worst.", "William Penn"),
    Quote("You can do anything, but not everything.", "David Allen"),
    Quote(
        "Simplicity boils down to two steps: Identify the essential. Eliminate the rest.",
        "Leo Babauta",
    ),
    Quote("What gets measured gets managed.", "Peter Drucker"),
    Quote("Plans are nothing; planning is everything.", "Dwight D. Eisenhower"),
    Quote(
        "The key is not to prioritize what's on your schedule, but to schedule your priorities.",
        "Stephen Covey",
    ),
    Quote(
        "Efficiency is doing things right. Effectiveness is doing the right things.",
        "Peter Drucker",
    ),
    Quote(
        "There is nothing so useless as doing efficiently that which should not be done at all.",
        "Peter Drucker",
    ),
    Quote(
        "Working on the right thing is probably more important than working hard.",
        "Caterina Fake",
    ),
    Quote(
        "It is not enough to be busy; so are the ants. The question is: What are we busy about?",
        "Henry David Thoreau",
    ),
    Quote(
        "Time is more valuable than money. You can get more money, but you cannot get more time.",
        "Jim Rohn",
    ),
]


def get_daily_quote(day: date) -> Quote:
    """Same quote all day, a different one each day of the year."""
    return QUOTES[day.timetuple().tm_yday % len(QUOTES)]
