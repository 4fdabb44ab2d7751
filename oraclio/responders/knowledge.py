"""Closed factual knowledge base for the local responder.

Each entry pairs trigger keywords with a canned answer. Keywords are matched
as lower-case substrings; compiled patterns are used where a bare substring
would be too eager (``pi`` inside ``pipeline``). Entries are checked in
order and the first hit wins.
"""

import re
from typing import Optional, Pattern, Sequence, Tuple, Union

Keyword = Union[str, Pattern]

FACTS: Tuple[Tuple[Sequence[Keyword], str], ...] = (
    # Geography
    (("capital of australia",),
     "The capital of Australia is Canberra. It was established as the capital in 1913 and is located in the Australian Capital Territory (ACT)."),
    (("capital of france",),
     "The capital of France is Paris. It's located in northern France and has been the country's capital since 508 AD."),
    (("capital of japan",),
     "The capital of Japan is Tokyo. It became the capital in 1868 and is one of the world's most populous metropolitan areas."),
    (("capital of russia",),
     "The capital of Russia is Moscow. It has been the capital since 1918 and is the largest city in Russia."),
    (("capital of usa", "capital of america"),
     "The capital of the United States is Washington, D.C. It was established as the capital in 1790 and is named after George Washington."),
    (("capital of china",),
     "The capital of China is Beijing. It has been the capital for most periods since 1421 and is home to over 21 million people."),
    (("capital of germany",),
     "The capital of Germany is Berlin. It became the capital again in 1990 after German reunification, with a population of about 3.7 million."),
    (("capital of india",),
     "The capital of India is New Delhi. It was established as the capital in 1911, replacing Calcutta (now Kolkata)."),
    (("capital of brazil",),
     "The capital of Brazil is Brasília. It was built from scratch and became the capital in 1960, replacing Rio de Janeiro."),
    (("capital of canada",),
     "The capital of Canada is Ottawa. It was chosen as the capital in 1857 by Queen Victoria and is located in Ontario."),
    (("capital of egypt",),
     "The capital of Egypt is Cairo. It's the largest city in the Arab world with over 20 million people in the metropolitan area."),
    (("capital of italy",),
     "The capital of Italy is Rome. Known as the 'Eternal City,' it has been continuously inhabited for over 2,800 years."),
    (("biggest country", "largest country"),
     "The largest country in the world is Russia. It covers about 17.1 million square kilometers (6.6 million square miles), spanning 11 time zones."),
    (("smallest country",),
     "The smallest country in the world is Vatican City. It covers only 0.44 square kilometers and has a population of about 800 people."),
    (("longest river",),
     "The longest river in the world is the Nile River in Africa, stretching approximately 6,650 kilometers (4,130 miles)."),
    (("highest mountain", "tallest mountain"),
     "The tallest mountain on Earth is Mount Everest, standing at 8,848.86 meters (29,031.7 feet) above sea level."),
    (("deepest ocean",),
     "The deepest part of the ocean is the Challenger Deep in the Mariana Trench, reaching approximately 11,034 meters (36,200 feet)."),
    (("largest ocean",),
     "The largest ocean is the Pacific Ocean, covering about 165 million square kilometers (63.8 million square miles)."),

    # Science
    (("chemical formula for water", "formula of water"),
     "The chemical formula for water is H₂O. Each water molecule consists of two hydrogen atoms bonded to one oxygen atom."),
    (("speed of light",),
     "The speed of light in a vacuum is approximately 299,792,458 meters per second (about 300,000 km/s)."),
    (("periodic table", "how many elements"),
     "The periodic table currently contains 118 confirmed chemical elements, from Hydrogen (H) to Oganesson (Og)."),
    ((re.compile(r"\bdna\b"), "genetic code"),
     "DNA (Deoxyribonucleic acid) carries genetic information in all living organisms. It consists of four bases: Adenine, Thymine, Guanine and Cytosine."),
    (("theory of relativity", "einstein relativity"),
     "Einstein's Theory of Relativity consists of Special Relativity (1905) and General Relativity (1915)."),
    (("quantum mechanics", "quantum physics"),
     "Quantum mechanics describes the behavior of matter and energy at the atomic and subatomic scale, where classical physics breaks down."),
    (("photosynthesis",),
     "Photosynthesis is the process by which plants convert sunlight, carbon dioxide and water into glucose and oxygen: 6CO₂ + 6H₂O + light → C₆H₁₂O₆ + 6O₂."),
    (("black hole",),
     "A black hole is a region of spacetime where gravity is so strong that nothing, not even light, can escape once it crosses the event horizon."),
    (("human body temperature", "normal body temperature"),
     "Normal human body temperature is approximately 37°C (98.6°F), though it varies slightly between individuals."),
    (("boiling point of water",),
     "Water boils at 100°C (212°F) at standard atmospheric pressure."),
    (("freezing point of water",),
     "Water freezes at 0°C (32°F) at standard atmospheric pressure."),

    # Technology
    (("who invented the computer", "first computer"),
     "The first general-purpose electronic digital computer was ENIAC (1945). Charles Babbage designed the mechanical Analytical Engine in the 1830s."),
    (("who invented the internet",),
     "The internet grew out of ARPANET (1969), with researchers like Vint Cerf and Bob Kahn. Tim Berners-Lee invented the World Wide Web in 1989."),
    (("programming languages", "popular programming language"),
     "Popular programming languages include Python, JavaScript, Java, C++, C#, Go, Rust and TypeScript."),
    (("artificial intelligence", re.compile(r"\bai\b"), "machine learning"),
     "Artificial Intelligence (AI) is the simulation of human intelligence in machines. Machine Learning is a subset of AI that lets systems learn from data."),
    (("blockchain", "bitcoin"),
     "Blockchain is a distributed ledger secured using cryptography. Bitcoin was the first cryptocurrency built on it."),

    # History and culture
    (("world war 1", "first world war"),
     "World War I (1914-1918) was a global war that originated in Europe and resulted in over 15 million deaths."),
    (("world war 2", "second world war"),
     "World War II (1939-1945) was the deadliest conflict in human history, with 70-85 million fatalities."),
    (("ancient egypt", "pyramids"),
     "Ancient Egypt was a civilization along the Nile that lasted over 3,000 years. The Great Pyramid of Giza was built around 2580-2510 BC."),
    (("renaissance",),
     "The Renaissance (14th-17th centuries) was a period of European cultural and artistic rebirth following the Middle Ages."),
    (("french revolution",),
     "The French Revolution (1789-1799) abolished the French monarchy and established a republic."),
    (("shakespeare",),
     "William Shakespeare (1564-1616) was an English playwright and poet. He wrote 39 plays and 154 sonnets."),
    (("mona lisa", "leonardo da vinci"),
     "The Mona Lisa is a portrait painted by Leonardo da Vinci between 1503 and 1519. It's housed in the Louvre Museum."),
    (("classical music", "beethoven"),
     "Ludwig van Beethoven (1770-1827) was a German composer who bridged the Classical and Romantic periods."),

    # Mathematics
    ((re.compile(r"\bpi\b"), "value of pi"),
     "Pi (π) is approximately 3.14159265359. It's the ratio of a circle's circumference to its diameter and is an irrational number."),
    (("fibonacci sequence",),
     "The Fibonacci sequence is: 0, 1, 1, 2, 3, 5, 8, 13, 21, 34, 55... Each number is the sum of the two preceding ones."),
    (("prime numbers",),
     "Prime numbers are natural numbers greater than 1 with no positive divisors other than 1 and themselves: 2, 3, 5, 7, 11, 13..."),
    (("square root of 2",),
     "The square root of 2 is approximately 1.41421356. It's an irrational number."),

    # Biology
    (("human genome", "how many genes"),
     "The human genome contains approximately 20,000-25,000 protein-coding genes. The Human Genome Project was completed in 2003."),
    (("evolution", "darwin"),
     "Charles Darwin's theory of evolution by natural selection explains how species change over time."),
    (("dinosaurs extinct", "extinction"),
     "Dinosaurs went extinct approximately 66 million years ago, likely due to an asteroid impact combined with volcanic activity."),

    # Sport
    (("olympics", "olympic games"),
     "The Olympic Games are held every four years. The modern Olympics began in 1896 in Athens, Greece."),
    (("football world cup", "fifa world cup"),
     "The FIFA World Cup is held every four years. Brazil has won it 5 times, more than any other country."),
    (("fastest human", "usain bolt"),
     "Usain Bolt holds the world record for 100 meters (9.58 seconds) and 200 meters (19.19 seconds), set in 2009."),
    (("marathon distance",),
     "A marathon is 42.195 kilometers (26.219 miles) long."),

    # Economics
    (("stock market",),
     "The stock market is where shares of public companies are traded. Prices move with supply and demand and company performance."),
    (("inflation",),
     "Inflation is the rate at which prices rise over time, reducing purchasing power. Central banks typically target 2% a year."),
    ((re.compile(r"\bgdp\b"), "gross domestic product"),
     "GDP (Gross Domestic Product) measures the total value of goods and services produced in a country."),
    (("cryptocurrency", "how crypto works"),
     "Cryptocurrency is digital currency secured by cryptography and typically built on a blockchain. Bitcoin, created in 2009, was the first."),

    # Languages
    (("most spoken language",),
     "Mandarin Chinese is the most spoken language by native speakers (900+ million). English is the most widely learned second language."),
    (("how many languages",),
     "There are approximately 7,000 languages spoken in the world today, many of them endangered."),

    # Climate
    (("global warming", "climate change"),
     "Climate change refers to long-term shifts in global temperatures and weather patterns, driven mainly by burning fossil fuels."),
    (("greenhouse effect",),
     "The greenhouse effect occurs when gases like CO₂ and methane trap heat in Earth's atmosphere."),
    (("why seasons change",),
     "Seasons occur because Earth's axis is tilted 23.5 degrees relative to its orbit around the Sun."),

    # Space
    (("solar system", "planets"),
     "Our solar system has 8 planets: Mercury, Venus, Earth, Mars, Jupiter, Saturn, Uranus and Neptune. Jupiter is the largest."),
    (("milky way", "our galaxy"),
     "The Milky Way is our galaxy, a spiral about 100,000 light-years across containing over 100 billion stars."),
    (("moon phases", "lunar cycle"),
     "The lunar cycle lasts about 29.5 days, progressing from new moon through full moon and back."),
    (("light year",),
     "A light-year is the distance light travels in one year: approximately 9.46 trillion kilometers."),

    # Health
    (("blood types", "blood groups"),
     "The main blood groups are A, B, AB and O, each Rh-positive or Rh-negative. O-negative is the universal donor."),
    (("recommended sleep", "how much sleep"),
     "Adults need 7-9 hours of sleep per night. Teenagers need 8-10 hours."),
    (("exercise benefits", "why exercise"),
     "Regular exercise improves cardiovascular health, strengthens muscles and bones and boosts mental health."),

    # Russian
    (("столица россии", "москва столица"),
     "Столица России - Москва. Это крупнейший город страны с населением более 12 миллионов человек."),
    (("самая длинная река россии", "река волга"),
     "Самая длинная река в России - Лена (4400 км). Волга - самая длинная река в Европе (3530 км)."),
    (("байкал",),
     "Озеро Байкал - самое глубокое озеро в мире (1642 м) и содержит около 20% всей пресной воды планеты."),
    (("русский язык",),
     "На русском языке говорят около 260 миллионов человек по всему миру."),
)


def _matches(keyword: Keyword, text: str) -> bool:
    if isinstance(keyword, str):
        return keyword in text
    return keyword.search(text) is not None


def lookup_fact(message: str) -> Optional[str]:
    """Answer for the first knowledge entry whose keyword occurs in the message."""
    text = message.lower()
    for keywords, answer in FACTS:
        if any(_matches(keyword, text) for keyword in keywords):
            return answer
    return None
