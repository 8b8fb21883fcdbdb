# sample_case.py
# A complete demo case in the case store's camelCase JSON shape.
# Used by the app when no file is uploaded and by the tests.

from __future__ import annotations

import copy
from typing import Any, Dict

from case_models import Case, load_case

SAMPLE_CASE: Dict[str, Any] = {
    "caseNumber": "MC-2024-0117",
    "claimantDetails": {
        "fullName": "Jordan Avery",
        "dateOfBirth": "1990-08-20",
        "gender": "Female",
        "address": "14 Mill Lane, Leeds, LS6 2AB",
        "identificationProvided": "Driving licence",
        "accompaniedBy": "Alone",
        "dateOfReport": "2024-05-02",
        "dateOfExamination": "2024-04-28",
        "timeSpent": "30 minutes",
        "helpWithCommunication": False,
        "placeOfExamination": "Leeds Medical Centre",
        "instructingParty": "Northern Claims Ltd",
        "instructingPartyRef": "NCL-5521",
        "solicitorName": "Harper & Cole Solicitors",
        "referenceNumber": "HC/88/2024",
        "medcoRefNumber": "MED-778812",
    },
    "accidentDetails": {
        "accidentDate": "2024-03-15",
        "timeOfDay": "Morning",
        "vehicleLocation": "A61 Scott Hall Road, Leeds",
        "weatherConditions": "Dry",
        "accidentType": "Rear-end collision",
        "vehicleType": "Car",
        "claimantPosition": "Driver",
        "vehicleMovement": "Stationary",
        "impactLocation": "Rear",
        "damageSeverity": "Moderately damaged",
        "seatBeltWorn": True,
        "headRestFitted": True,
        "airBagDeployed": False,
        "policeAttended": False,
        "accidentDescription": "The claimant was waiting at traffic lights when the third party drove into the back of the vehicle.",
        "witnesses": [
            {"name": "Sam Patel", "phone": "07700 900123", "statement": "Saw the other car fail to stop."},
        ],
    },
    "physicalInjury": {
        "injuries": [
            {"type": "Neck", "onsetTime": "immediate", "initialSeverity": "Moderate", "currentSeverity": "Mild"},
            {"type": "Back", "onsetTime": "delayed", "initialSeverity": "Mild", "currentSeverity": "Resolved", "resolutionDays": "21"},
            {"type": "Headache", "onsetTime": "immediate", "initialSeverity": "Mild", "currentSeverity": "Mild"},
            {"type": "Other", "description": "Bruising to left knee", "onsetTime": "delayed", "initialSeverity": "Mild", "currentSeverity": "Resolved"},
        ],
        "additionalNotes": "No loss of consciousness reported.",
    },
    "psychologicalInjuries": {
        "symptoms": ["Anxiety when driving"],
        "travelAnxietySymptoms": ["Nervous as a driver", "Checking mirrors frequently"],
        "travelAnxietyOnset": "immediate",
        "travelAnxietyInitialSeverity": "Moderate",
        "travelAnxietyCurrentSeverity": "Mild",
    },
    "treatments": {
        "receivedTreatmentAtScene": False,
        "wentToHospital": False,
        "wentToGPWalkIn": True,
        "daysToGPWalkIn": "3",
        "takingParacetamol": True,
        "takingIbuprofen": True,
        "physiotherapySessions": "4",
    },
    "lifestyleImpact": {
        "currentJobTitle": "Warehouse supervisor",
        "workStatus": "Full time",
        "daysOffWork": "5",
        "daysLightDuties": "10",
        "workDifficulties": ["Lifting", "Long periods of standing"],
        "hasSleepDisturbance": True,
        "sleepDisturbances": ["Difficulty falling asleep"],
        "hasDomesticImpact": True,
        "domesticActivities": ["Vacuuming", "Gardening"],
        "hasSportLeisureImpact": True,
        "sportLeisureActivities": ["Gym"],
        "hasSocialImpact": False,
    },
    "familyHistory": {
        "hasPreviousAccident": False,
        "hasPreviousMedicalCondition": False,
        "hasExceptionalSeverity": False,
        "hasExceptionalCircumstances": False,
        "physiotherapyPreference": "Yes",
    },
    "prognosis": {
        "overallPrognosis": "Good",
        "expectedRecoveryTime": "6-9 months from date of accident",
        "permanentImpairment": "None expected",
        "futureCarePlans": "Complete recommended physiotherapy course",
        "treatmentRecommendations": [
            "Continue physiotherapy for 6 sessions",
            "Simple analgesia as required",
            "Gradual return to normal activities",
            "Review if symptoms persist beyond 9 months",
        ],
        "additionalNotes": "Recovery is expected to follow the usual course for soft-tissue injuries.",
    },
    "expertDetails": {
        "examiner": "Dr Morgan Ellis",
        "credentials": "MBBS, MRCGP",
        "specialty": "General Practice",
        "licenseNumber": "7012345",
        "licensureState": "MC-10442",
        "experienceYears": 12,
        "contactInformation": "reports@ellis-medical.example",
        "signatureDate": "2024-05-02",
    },
}


def build_sample_case() -> Case:
    """The demo case, validated. Each call returns an independent snapshot."""
    return load_case(copy.deepcopy(SAMPLE_CASE))
