from typing import Dict, Iterable, Tuple

ELEMENT = {
  "Aries":"fire","Leo":"fire","Sagittarius":"fire",
  "Taurus":"earth","Virgo":"earth","Capricorn":"earth",
  "Gemini":"air","Libra":"air","Aquarius":"air",
  "Cancer":"water","Scorpio":"water","Pisces":"water",
}
MODALITY = {
  "Aries":"cardinal","Cancer":"cardinal","Libra":"cardinal","Capricorn":"cardinal",
  "Taurus":"fixed","Leo":"fixed","Scorpio":"fixed","Aquarius":"fixed",
  "Gemini":"mutable","Virgo":"mutable","Sagittarius":"mutable","Pisces":"mutable",
}


def balances(signs: Iterable[str]) -> Tuple[Dict[str,int], Dict[str,int]]:
    e = {"fire":0,"earth":0,"air":0,"water":0}
    m = {"cardinal":0,"fixed":0,"mutable":0}
    for s in signs:
        e[ELEMENT[s]] += 1
        m[MODALITY[s]] += 1
    return e, m


def dominant(counts: Dict[str,int]) -> str:
    return max(counts, key=counts.get)
