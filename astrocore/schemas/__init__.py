from .charts import (
    AspectOut,
    BodyOut,
    ChartInput,
    ChartOptions,
    ChartResponse,
    HouseOut,
    MetaOut,
    MoonPhaseOut,
    NakshatraOut,
    Place,
    chart_id,
    to_response,
)
