# -*- coding: utf-8 -*-
"""Static peptide catalog, goal options and age-group notes."""

from __future__ import annotations

from typing import Any, Dict, List

PEPTIDES: Dict[str, List[Dict[str, Any]]] = {
    "energy": [
        {
            "name": "CJC-1295 with DAC",
            "description": "A growth hormone releasing hormone analog that promotes natural energy production and vitality through improved sleep quality and recovery.",
            "dosage": "2mg per week",
            "timing": "Before bedtime",
            "age_recommendation": {"min": 25, "max": 65},
            "benefits": ["Increased energy", "Better sleep", "Enhanced recovery"],
        },
        {
            "name": "Ipamorelin",
            "description": "A selective growth hormone secretagogue that supports natural energy levels without affecting cortisol or prolactin levels.",
            "dosage": "200-300mcg daily",
            "timing": "Morning or pre-workout",
            "age_recommendation": {"min": 20, "max": 70},
            "benefits": ["Sustained energy", "Improved metabolism", "Fat loss support"],
        },
        {
            "name": "MOTS-c",
            "description": "A mitochondrial-derived peptide that enhances cellular energy production and metabolic efficiency.",
            "dosage": "5-10mg twice weekly",
            "timing": "Morning",
            "age_recommendation": {"min": 30, "max": 80},
            "benefits": ["Mitochondrial health", "Energy production", "Metabolic support"],
        },
    ],
    "sleep": [
        {
            "name": "DSIP (Delta Sleep-Inducing Peptide)",
            "description": "A natural sleep-promoting peptide that helps regulate sleep cycles and improve sleep quality.",
            "dosage": "100-200mcg",
            "timing": "30 minutes before bedtime",
            "age_recommendation": {"min": 18, "max": 75},
            "benefits": ["Deep sleep", "Sleep cycle regulation", "Stress reduction"],
        },
        {
            "name": "CJC-1295 with DAC",
            "description": "Promotes deeper, more restorative sleep through growth hormone optimization, leading to better recovery.",
            "dosage": "2mg per week",
            "timing": "Before bedtime",
            "age_recommendation": {"min": 25, "max": 65},
            "benefits": ["Sleep quality", "Recovery", "Anti-aging"],
        },
        {
            "name": "Glycine Peptide Complex",
            "description": "A specialized peptide formulation that promotes relaxation and supports natural sleep patterns.",
            "dosage": "1-3g",
            "timing": "1 hour before bed",
            "age_recommendation": {"min": 18, "max": 85},
            "benefits": ["Relaxation", "Sleep onset", "Sleep maintenance"],
        },
    ],
    "focus": [
        {
            "name": "Noopept",
            "description": "A nootropic peptide that enhances cognitive function, focus, and mental clarity through neuroprotective mechanisms.",
            "dosage": "10-30mg daily",
            "timing": "Morning with breakfast",
            "age_recommendation": {"min": 18, "max": 60},
            "benefits": ["Mental clarity", "Focus enhancement", "Memory support"],
        },
        {
            "name": "Selank",
            "description": "An anxiolytic peptide that reduces anxiety while enhancing cognitive performance and mental focus.",
            "dosage": "150-300mcg daily",
            "timing": "Morning",
            "age_recommendation": {"min": 20, "max": 65},
            "benefits": ["Anxiety reduction", "Cognitive enhancement", "Stress management"],
        },
        {
            "name": "Cerebrolysin",
            "description": "A neuropeptide complex that supports brain health, cognitive function, and neural plasticity.",
            "dosage": "5-10ml per session",
            "timing": "Morning",
            "age_recommendation": {"min": 25, "max": 70},
            "benefits": ["Neuroprotection", "Cognitive enhancement", "Brain health"],
        },
    ],
    "recovery": [
        {
            "name": "BPC-157",
            "description": "A healing peptide that accelerates tissue repair, reduces inflammation, and supports overall recovery.",
            "dosage": "250-500mcg daily",
            "timing": "Post-workout or with meals",
            "age_recommendation": {"min": 18, "max": 80},
            "benefits": ["Tissue repair", "Inflammation reduction", "Injury recovery"],
        },
        {
            "name": "TB-500 (Thymosin Beta-4)",
            "description": "A regenerative peptide that promotes healing, reduces inflammation, and supports muscle and tissue recovery.",
            "dosage": "2-5mg twice weekly",
            "timing": "Post-workout",
            "age_recommendation": {"min": 20, "max": 75},
            "benefits": ["Muscle recovery", "Tissue regeneration", "Anti-inflammatory"],
        },
        {
            "name": "IGF-1 LR3",
            "description": "An insulin-like growth factor that supports muscle recovery, growth, and overall tissue repair.",
            "dosage": "20-40mcg daily",
            "timing": "Post-workout",
            "age_recommendation": {"min": 21, "max": 65},
            "benefits": ["Muscle growth", "Recovery acceleration", "Tissue repair"],
        },
    ],
    "longevity": [
        {
            "name": "Epitalon",
            "description": "A telomerase-activating peptide that supports cellular longevity and anti-aging processes.",
            "dosage": "5-10mg per cycle",
            "timing": "Before bedtime",
            "age_recommendation": {"min": 35, "max": 85},
            "benefits": ["Anti-aging", "Cellular longevity", "Immune support"],
        },
        {
            "name": "GHK-Cu",
            "description": "A copper peptide complex that supports skin health, wound healing, and anti-aging processes.",
            "dosage": "1-3mg daily",
            "timing": "Morning",
            "age_recommendation": {"min": 30, "max": 80},
            "benefits": ["Skin health", "Collagen production", "Anti-aging"],
        },
        {
            "name": "NAD+ Peptide Precursors",
            "description": "Peptides that support NAD+ production for cellular energy, DNA repair, and longevity pathways.",
            "dosage": "100-500mg daily",
            "timing": "Morning",
            "age_recommendation": {"min": 40, "max": 85},
            "benefits": ["Cellular energy", "DNA repair", "Longevity support"],
        },
    ],
}

GOALS: List[Dict[str, str]] = [
    {"value": "energy", "label": "Energy & Vitality", "description": "Boost natural energy and vitality"},
    {"value": "sleep", "label": "Better Sleep", "description": "Improve sleep quality and recovery"},
    {"value": "focus", "label": "Mental Focus", "description": "Enhance cognitive performance and clarity"},
    {"value": "recovery", "label": "Muscle Recovery", "description": "Accelerate healing and tissue repair"},
    {"value": "longevity", "label": "Anti-Aging", "description": "Support longevity and healthy aging"},
]

PERSONALIZED_NOTES: Dict[str, Dict[str, str]] = {
    "young": {
        "energy": "At your age, focus on natural optimization rather than aggressive supplementation.",
        "sleep": "Establishing good sleep hygiene is crucial for your age group.",
        "focus": "Cognitive enhancement can provide significant benefits for productivity.",
        "recovery": "Your natural recovery is still strong, use this to enhance performance.",
        "longevity": "Starting early with longevity protocols can provide long-term benefits.",
    },
    "middle": {
        "energy": "This peptide can help counteract age-related energy decline.",
        "sleep": "Sleep quality often decreases with age - this can help restore it.",
        "focus": "Cognitive support becomes increasingly important in your 40s-50s.",
        "recovery": "Recovery time increases with age - this can help maintain performance.",
        "longevity": "This is an optimal age to begin serious anti-aging interventions.",
    },
    "mature": {
        "energy": "Energy optimization is crucial for maintaining vitality at your age.",
        "sleep": "Quality sleep becomes even more important for health and recovery.",
        "focus": "Cognitive support can help maintain mental sharpness and clarity.",
        "recovery": "Enhanced recovery support is essential for maintaining activity levels.",
        "longevity": "Anti-aging peptides can significantly impact quality of life.",
    },
}

DEFAULT_NOTE = "Consult with a healthcare provider for personalized guidance."
