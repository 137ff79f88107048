"""Records kept about findings: statuses, annotations, finding metadata and summaries."""