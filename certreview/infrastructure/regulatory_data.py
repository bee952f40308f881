"""
Static regulatory reference tables for oil and natural gas measurement.

Tables (Portuguese, as published in the measurement regulation):
1. Maximum admissible uncertainty of measurement systems
2. Maximum admitted uncertainty of measurement system components
3. Inspection periodicity of specific components (natural gas)
4. Calibration periodicity of natural gas measurement systems
5. Calibration periodicity of petroleum measurement systems

Rows are immutable and kept in publication order; lookups that return the
first match depend on this order.
"""
from typing import Tuple

from certreview.domain.entities import (
    RegulatoryCategory,
    MaxUncertaintySystem,
    MaxUncertaintyComponent,
    InspectionPeriodicity,
    CalibrationPeriodicityGas,
    CalibrationPeriodicityPetroleum,
)

PETROLEUM = RegulatoryCategory.PETROLEUM
NATURAL_GAS = RegulatoryCategory.NATURAL_GAS

PULSE_RESOLUTION = "1 pulso a cada 100.000 ou 0,001% durante a fase de transmissão de pulsos"


# 1. Incertezas máximas admissíveis dos sistemas de medição
MAX_UNCERTAINTY_SYSTEMS: Tuple[MaxUncertaintySystem, ...] = (
    MaxUncertaintySystem(
        id=1,
        measurement_system=(
            "Medição fiscal e de transferência de custódia de petróleo com viscosidade "
            "dinâmica de até 1000 mPa.s"
        ),
        max_uncertainty="0,3%",
        category=PETROLEUM,
    ),
    MaxUncertaintySystem(
        id=2,
        measurement_system=(
            "Medição fiscal e de transferência de custódia de petróleo com viscosidade "
            "dinâmica acima de 1000 mPa.s"
        ),
        max_uncertainty="1,0%",
        category=PETROLEUM,
    ),
    MaxUncertaintySystem(
        id=3,
        measurement_system="Medição de apropriação de petróleo",
        max_uncertainty="1,0%",
        category=PETROLEUM,
    ),
    MaxUncertaintySystem(
        id=4,
        measurement_system=(
            "Medição fiscal e de transferência de custódia de gás natural - medidor linear"
        ),
        max_uncertainty="1,0%",
        category=NATURAL_GAS,
    ),
    MaxUncertaintySystem(
        id=5,
        measurement_system="Medição de apropriação de gás natural - medidor linear",
        max_uncertainty="2,0%",
        category=NATURAL_GAS,
    ),
    MaxUncertaintySystem(
        id=6,
        measurement_system=(
            "Medição fiscal e de transferência de custódia de gás natural - medidor por "
            "diferença de pressão"
        ),
        max_uncertainty="1,5%",
        category=NATURAL_GAS,
    ),
    MaxUncertaintySystem(
        id=7,
        measurement_system="Medição de apropriação de gás - medidor por diferença de pressão",
        max_uncertainty="2,0%",
        category=NATURAL_GAS,
    ),
    MaxUncertaintySystem(
        id=8,
        measurement_system="Medidor de gás natural ventilado ou queimado em tocha",
        max_uncertainty="5,0%",
        category=NATURAL_GAS,
    ),
    MaxUncertaintySystem(
        id=9,
        measurement_system="Medição operacional de petróleo",
        max_uncertainty="1,0%",
        category=PETROLEUM,
    ),
    MaxUncertaintySystem(
        id=10,
        measurement_system="Medição operacional de gás natural",
        max_uncertainty="3,0%",
        category=NATURAL_GAS,
    ),
    MaxUncertaintySystem(
        id=11,
        measurement_system="Volume total de produção de petróleo",
        max_uncertainty="0,6%",
        category=PETROLEUM,
    ),
    MaxUncertaintySystem(
        id=12,
        measurement_system="Volume total de produção de gás",
        max_uncertainty="3,0%",
        category=NATURAL_GAS,
        notes=(
            "Incerteza expandida do volume líquido médio pelo sistema de medição na "
            "condição padrão de medição, com probabilidade de abrangência de "
            "aproximadamente 95%, considerando o disposto no item 9.3.1."
        ),
    ),
)


# 2. Incertezas máximas admitidas dos componentes dos sistemas de medição
MAX_UNCERTAINTY_COMPONENTS: Tuple[MaxUncertaintyComponent, ...] = (
    MaxUncertaintyComponent(
        id=1,
        component=(
            "Medidor em operação de petróleo fiscal ou transferência de custódia – "
            "ultrassônico ou coriolis"
        ),
        mesh_uncertainty=PULSE_RESOLUTION,
        max_admitted_uncertainty="0,20%",
        repeatability="0,05% em 3 corridas – incerteza equivalente de 0,075%",
    ),
    MaxUncertaintyComponent(
        id=2,
        component="Medidor em operação de petróleo apropriação",
        mesh_uncertainty=PULSE_RESOLUTION,
        max_admitted_uncertainty="0,70%",
        repeatability="0,09% em 3 corridas – incerteza equivalente de 0,133%",
    ),
    MaxUncertaintyComponent(
        id=3,
        component="Medidor padrão de trabalho de gás natural – medidor linear",
        mesh_uncertainty=PULSE_RESOLUTION,
        max_admitted_uncertainty="0,50%",
        repeatability="0,17% em 3 corridas sucessivas – incerteza equivalente de 0,27%",
    ),
    MaxUncertaintyComponent(
        id=4,
        component=(
            "Medidor em operação de gás natural fiscal ou transferência de custódia – "
            "turbina ou deslocamento positivo"
        ),
        mesh_uncertainty=PULSE_RESOLUTION,
        max_admitted_uncertainty="0,70%",
        repeatability="0,28% em 3 corridas sucessivas",
    ),
    MaxUncertaintyComponent(
        id=5,
        component=(
            "Medidor em operação de gás natural fiscal ou transferência de custódia – "
            "ultrassônico ou coriolis"
        ),
        mesh_uncertainty=PULSE_RESOLUTION,
        max_admitted_uncertainty="0,70%",
        repeatability="0,40% em 3 corridas sucessivas",
    ),
    MaxUncertaintyComponent(
        id=6,
        component="Medidor em operação de gás natural apropriação – medidor linear",
        mesh_uncertainty=PULSE_RESOLUTION,
        max_admitted_uncertainty="1,20%",
        repeatability="0,50% em 3 corridas sucessivas – incerteza equivalente de 0,73%",
    ),
    MaxUncertaintyComponent(
        id=7,
        component="Medição de pressão estática",
        mesh_uncertainty="0,30%",
        max_admitted_uncertainty="0,10%",
    ),
    MaxUncertaintyComponent(
        id=8,
        component="Medição de temperatura",
        mesh_uncertainty="0,30°C",
        max_admitted_uncertainty="0,20°C",
    ),
    MaxUncertaintyComponent(
        id=9,
        component="Medição de pressão diferencial",
        mesh_uncertainty="0,30%",
        max_admitted_uncertainty="0,10%",
    ),
    MaxUncertaintyComponent(
        id=10,
        component="Analisador em linha – massa específica de petróleo ou gás natural",
        mesh_uncertainty="0,50 kg/m³",
        max_admitted_uncertainty="0,30 kg/m³",
    ),
    MaxUncertaintyComponent(
        id=11,
        component="Analisador em linha – BSW",
        mesh_uncertainty="-",
        max_admitted_uncertainty=(
            "0,05% em valor absoluto para BSW de 0% a 1%; 5% do valor medido para BSW "
            "superior a 1%"
        ),
        repeatability="0,5% do valor medido para BSW acima de 0,01%",
    ),
    MaxUncertaintyComponent(
        id=12,
        component="Analisador em linha – cromatógrafo",
        mesh_uncertainty="-",
        max_admitted_uncertainty="0,50% do fator de compressibilidade",
        repeatability="De 0% a 25%: 0,02%; de 25% a 100%: 0,05% em mol",
    ),
)


# 3. Periodicidade de inspeções dos componentes específicos (gás natural)
def _inspection(id, instrument, months):
    return InspectionPeriodicity(
        id=id,
        instrument=instrument,
        fiscal=months,
        appropriation=months,
        custody_transfer_produced=months,
        custody_transfer_processed=months,
        category=NATURAL_GAS,
    )


INSPECTION_PERIODICITIES: Tuple[InspectionPeriodicity, ...] = (
    _inspection(1, "Inspeção de placa de orifício", "12 meses"),
    _inspection(2, "Inspeção de trecho reto", "24 meses"),
    _inspection(3, "Inspeção de porta placa", "12 meses"),
    _inspection(4, "Inspeção de retificador/condicionador de fluxo", "24 meses"),
)


# 4. Periodicidade de calibração dos sistemas de medição de gás natural
CALIBRATION_PERIODICITIES_GAS: Tuple[CalibrationPeriodicityGas, ...] = (
    CalibrationPeriodicityGas(
        1, "Medidor Padrão de trabalho deslocamento positivo, rotativo e turbina",
        "24 meses", "24 meses", "24 meses", "24 meses",
    ),
    CalibrationPeriodicityGas(
        2, "Medidor Padrão de trabalho Coriolis",
        "30 meses", "30 meses", "30 meses", "24 meses",
    ),
    CalibrationPeriodicityGas(
        3, "Medidor Padrão de trabalho Ultrassônico",
        "30 meses", "30 meses", "30 meses", "60 meses",
    ),
    CalibrationPeriodicityGas(
        4, "Medidor Padrão de trabalho outras tecnologias",
        "12 meses", "12 meses", "12 meses", "12 meses",
    ),
    CalibrationPeriodicityGas(
        5, "Medidor em operação deslocamento positivo, rotativo e turbina com calibração externa",
        "18 meses", "18 meses", "18 meses", "24 meses",
    ),
    CalibrationPeriodicityGas(
        6, "Medidor em operação Coriolis com calibração externa",
        "24 meses", "24 meses", "24 meses", "24 meses",
    ),
    CalibrationPeriodicityGas(
        7, "Medidor em operação Ultrassônico com calibração externa",
        "24 meses", "24 meses", "24 meses", "60 meses",
    ),
    CalibrationPeriodicityGas(
        8, "Medidor em operação outras tecnologias com calibração externa",
        "6 meses", "12 meses", "12 meses", "12 meses",
    ),
    CalibrationPeriodicityGas(
        9, "Medidor em operação outras tecnologias com calibração na instalação",
        "12 meses", "12 meses", "12 meses", "12 meses",
    ),
    CalibrationPeriodicityGas(
        10,
        "Medidor em operação deslocamento positivo, rotativo e turbina com calibração "
        "na instalação",
        "2 meses", "4 meses", "4 meses", "4 meses",
    ),
)


# 5. Periodicidade de calibração dos sistemas de medição de petróleo
CALIBRATION_PERIODICITIES_PETROLEUM: Tuple[CalibrationPeriodicityPetroleum, ...] = (
    CalibrationPeriodicityPetroleum(
        1, "Tanques de Calibração", "Todos", "36 meses", "36 meses", "36 meses",
    ),
    CalibrationPeriodicityPetroleum(
        2, "Provador convencional", "Todos", "60 meses", "60 meses", "60 meses",
    ),
    CalibrationPeriodicityPetroleum(
        3, "Provador compacto", "Todos", "36 meses", "36 meses", "36 meses",
    ),
    CalibrationPeriodicityPetroleum(
        4, "Provador móvel", "Todos", "12 meses", "12 meses", "12 meses",
    ),
    CalibrationPeriodicityPetroleum(
        5,
        "Medidor padrão de trabalho deslocamento positivo, rotativo, turbina ou outras "
        "tecnologias",
        "Todos", "9 meses", "12 meses", "12 meses",
    ),
    CalibrationPeriodicityPetroleum(
        6, "Medidor padrão de trabalho coriolis ou ultrassônico",
        "Todos", "18 meses", "18 meses", "18 meses",
    ),
    CalibrationPeriodicityPetroleum(
        7,
        "Medidor em operação deslocamento positivo, rotativo, turbina ou outras "
        "tecnologias com calibração externa",
        "Todos", "3 meses", "6 meses", "6 meses",
    ),
    CalibrationPeriodicityPetroleum(
        8, "Medidor em operação coriolis ou ultrassônico com calibração externa",
        "Todos", "6 meses", "12 meses", "12 meses",
    ),
)
