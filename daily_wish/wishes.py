from .selection import Identity, wish_index

# Order matters: an index picks the same wish for everyone who hashes to it.
WISHES: list[str] = [
    "May your coffee be strong and your inbox be short.",
    "May a small kindness find you before noon.",
    "May the thing you have been putting off turn out to be easy.",
    "May you laugh out loud at least once today.",
    "May your code compile on the first try.",
    "May a stranger's smile make your afternoon.",
    "May you find the perfect song at the perfect moment.",
    "May today's worries shrink by dinnertime.",
    "May you get exactly the rest you need tonight.",
    "May an old friend think of you and reach out.",
    "May your best idea of the week arrive today.",
    "May every green light be yours.",
    "May you be patient with yourself today.",
    "May something you lost turn up when you least expect it.",
    "May your lunch be better than you planned.",
    "May the right words come to you when you need them.",
    "May you notice something beautiful on an ordinary walk.",
    "May your hard work be seen by the right people.",
    "May you say yes to one new thing today.",
    "May the weather match your mood, or lift it.",
    "May someone return a favour you had forgotten about.",
    "May your to-do list end the day shorter than it started.",
    "May you find calm in the middle of a busy hour.",
    "May your curiosity lead you somewhere good.",
    "May you be the reason someone smiles today.",
    "May your plans bend without breaking.",
    "May a good book or a good story find its way to you.",
    "May you feel proud of one small win today.",
    "May your next conversation leave you lighter.",
    "May you trust your instincts and be right.",
    "May the people you love be close, in person or in thought.",
    "May today give you a reason to celebrate tomorrow.",
    "May you end the day a little wiser and a lot kinder.",
]


def wish_for(identity: Identity | None, day: str) -> tuple[int, str]:
    idx = wish_index(identity, day, len(WISHES))
    return idx, WISHES[idx]
